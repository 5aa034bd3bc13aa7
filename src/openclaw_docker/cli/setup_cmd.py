"""`openclaw-docker` subcommands: setup, overlay, env, token."""

from __future__ import annotations

import sys

from openclaw_docker.cli.parse_common import parse_layout_argv
from openclaw_docker.compose_overlay import synthesize_overlay
from openclaw_docker.config import ENV_KEYS, DeployConfig, load_config
from openclaw_docker.env_file import reconcile_env_file
from openclaw_docker.errors import SetupError
from openclaw_docker.gateway_token import generate_token
from openclaw_docker.mounts import parse_mount_specs
from openclaw_docker.setup import resolve_token
from openclaw_docker.setup import run as run_setup


def _config_from_argv(argv: list[str]) -> tuple[DeployConfig, list[str]]:
    project_root, layout, rest = parse_layout_argv(argv)
    return load_config(project_root=project_root, layout=layout), rest


def run_setup_argv(argv: list[str] | None = None) -> None:
    """openclaw-docker setup [--project-root PATH] [--dry-run] [layout flags]."""
    if argv is None:
        argv = sys.argv[2:]
    config, rest = _config_from_argv(argv)
    sys.exit(run_setup(config, dry_run="--dry-run" in rest))


def run_overlay_argv(argv: list[str] | None = None) -> None:
    """Print the compose overlay the current environment would produce."""
    if argv is None:
        argv = sys.argv[2:]
    config, _rest = _config_from_argv(argv)
    overlay = synthesize_overlay(
        config.home_volume,
        parse_mount_specs(config.extra_mounts),
        config_dir=config.config_dir,
        workspace_dir=config.workspace_dir,
    )
    if overlay is None:
        print(
            "No overlay needed (OPENCLAW_HOME_VOLUME and OPENCLAW_EXTRA_MOUNTS are empty)",
            file=sys.stderr,
        )
        sys.exit(0)
    sys.stdout.write(overlay.render())
    sys.exit(0)


def run_env_argv(argv: list[str] | None = None) -> None:
    """Reconcile .env only, reusing the gateway token already stored there."""
    if argv is None:
        argv = sys.argv[2:]
    config, _rest = _config_from_argv(argv)
    try:
        config = config.with_token(resolve_token(config))
    except SetupError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)
    reconcile_env_file(config.env_file, ENV_KEYS, config.env_values())
    print(f"Updated {config.env_file}")
    sys.exit(0)


def run_token_argv(argv: list[str] | None = None) -> None:
    """Print a freshly generated gateway token."""
    try:
        print(generate_token())
    except SetupError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)
