"""OpenClaw local Docker deployment tooling: token, compose overlay, .env reconciliation."""

from openclaw_docker.compose_overlay import ComposeOverlay, synthesize_overlay, write_overlay
from openclaw_docker.config import ENV_KEYS, DeployConfig, load_config
from openclaw_docker.env_file import reconcile_env_file, reconcile_lines
from openclaw_docker.errors import MissingPrerequisiteError, SetupError, TokenError
from openclaw_docker.gateway_token import generate_token, provision_token
from openclaw_docker.mounts import parse_mount_specs

__all__ = [
    "ENV_KEYS",
    "ComposeOverlay",
    "DeployConfig",
    "MissingPrerequisiteError",
    "SetupError",
    "TokenError",
    "generate_token",
    "load_config",
    "parse_mount_specs",
    "provision_token",
    "reconcile_env_file",
    "reconcile_lines",
    "synthesize_overlay",
    "write_overlay",
]

__version__ = "0.1.0"
