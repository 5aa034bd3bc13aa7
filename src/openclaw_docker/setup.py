"""Docker setup: check docker, prepare dirs/token/overlay/.env, then build, onboard and start."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path

from openclaw_docker.compose_overlay import synthesize_overlay, write_overlay
from openclaw_docker.config import ENV_KEYS, DeployConfig
from openclaw_docker.env_file import existing_env_value, reconcile_env_file
from openclaw_docker.errors import MissingPrerequisiteError, SetupError
from openclaw_docker.gateway_token import provision_token
from openclaw_docker.mounts import parse_mount_specs

log = logging.getLogger(__name__)

CLI_SERVICE = "openclaw-cli"
GATEWAY_SERVICE = "openclaw-gateway"


def check_prerequisites() -> None:
    """Raise MissingPrerequisiteError unless docker and the compose plugin are usable."""
    if not shutil.which("docker"):
        msg = "docker is not installed. Please install it first."
        raise MissingPrerequisiteError(msg)
    try:
        r = subprocess.run(["docker", "compose", "version"], capture_output=True, text=True)
    except OSError as e:
        msg = f"Could not run docker compose: {e}"
        raise MissingPrerequisiteError(msg) from e
    if r.returncode != 0:
        msg = "Docker Compose not available (try: docker compose version)"
        raise MissingPrerequisiteError(msg)


def resolve_token(config: DeployConfig) -> str:
    """Token from the environment, else the one already in .env, else a new one."""
    existing = config.gateway_token or existing_env_value(
        config.env_file, "OPENCLAW_GATEWAY_TOKEN"
    )
    return provision_token(existing)


def prepare(config: DeployConfig) -> tuple[DeployConfig, Path | None]:
    """Create dirs, fill in the token, write the overlay (if any) and reconcile .env.

    Returns the config with its token set and the overlay path when one was written.
    """
    for d in (config.config_dir, config.workspace_dir):
        Path(d).mkdir(parents=True, exist_ok=True)
    config = config.with_token(resolve_token(config))

    mounts = parse_mount_specs(config.extra_mounts)
    overlay = synthesize_overlay(
        config.home_volume,
        mounts,
        config_dir=config.config_dir,
        workspace_dir=config.workspace_dir,
    )
    overlay_path: Path | None = None
    if overlay is not None:
        write_overlay(config.overlay_file, overlay)
        overlay_path = config.overlay_file
        print(f"Wrote {overlay_path}")

    reconcile_env_file(config.env_file, ENV_KEYS, config.env_values())
    print(f"Updated {config.env_file}")
    return config, overlay_path


def compose_args(config: DeployConfig, overlay_path: Path | None) -> list[str]:
    """-f arguments: the default compose file, plus the overlay when written."""
    args = ["-f", str(config.compose_file)]
    if overlay_path is not None:
        args.extend(["-f", str(overlay_path)])
    return args


def build_commands(config: DeployConfig, overlay_path: Path | None) -> list[list[str]]:
    """docker build, onboarding run, and gateway start, in order."""
    files = compose_args(config, overlay_path)
    return [
        [
            "docker",
            "build",
            "--build-arg",
            f"OPENCLAW_DOCKER_APT_PACKAGES={config.apt_packages}",
            "-t",
            config.image,
            "-f",
            str(config.dockerfile),
            str(config.project_root),
        ],
        ["docker", "compose", *files, "run", "--rm", CLI_SERVICE, "onboard", "--no-install-daemon"],
        ["docker", "compose", *files, "up", "-d", GATEWAY_SERVICE],
    ]


def _print_summary(config: DeployConfig, overlay_path: Path | None) -> None:
    files = " ".join(compose_args(config, overlay_path))
    print("")
    print("Gateway running with host port mapping.")
    print(f"Config: {config.config_dir}")
    print(f"Workspace: {config.workspace_dir}")
    print(f"Token: {config.gateway_token}")
    print(f"Dashboard: http://127.0.0.1:{config.gateway_port}/")
    print("")
    print("Commands:")
    print(f"  docker compose {files} logs -f {GATEWAY_SERVICE}")
    print(f"  docker compose {files} exec {GATEWAY_SERVICE} node dist/index.js health")


def run(config: DeployConfig, *, dry_run: bool = False) -> int:
    """Full setup. Returns 0, 1 on setup errors, or the first failing docker exit code."""
    try:
        if not dry_run:
            check_prerequisites()
        config, overlay_path = prepare(config)
    except SetupError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    for cmd in build_commands(config, overlay_path):
        if dry_run:
            print(f"[dry-run] would: {' '.join(cmd)}")
            continue
        print(f"==> {' '.join(cmd[:3])}")
        r = subprocess.run(cmd, cwd=str(config.project_root))
        if r.returncode != 0:
            log.debug("%s exited %s; stopping", cmd[:3], r.returncode)
            return r.returncode
    _print_summary(config, overlay_path)
    return 0
