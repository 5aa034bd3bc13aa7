"""Deployment configuration: recognized .env keys, layout defaults, load from environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

# Closed set of keys written to .env, in the order new lines are appended.
ENV_KEYS: tuple[str, ...] = (
    "OPENCLAW_CONFIG_DIR",
    "OPENCLAW_WORKSPACE_DIR",
    "OPENCLAW_GATEWAY_PORT",
    "OPENCLAW_BRIDGE_PORT",
    "OPENCLAW_GATEWAY_BIND",
    "OPENCLAW_GATEWAY_TOKEN",
    "OPENCLAW_IMAGE",
    "OPENCLAW_EXTRA_MOUNTS",
    "OPENCLAW_HOME_VOLUME",
    "OPENCLAW_DOCKER_APT_PACKAGES",
)

DEFAULT_GATEWAY_PORT = "18789"
DEFAULT_BRIDGE_PORT = "18790"
DEFAULT_GATEWAY_BIND = "lan"
DEFAULT_IMAGE = "openclaw:local"

# File names relative to project_root; override for other checkouts.
DEFAULT_LAYOUT: dict[str, str] = {
    "compose_file": "docker-compose.yml",
    "overlay_file": "docker-compose.extra.yml",
    "env_file": ".env",
    "dockerfile": "Dockerfile",
}


def resolve_layout(layout: dict[str, Any] | None) -> dict[str, str]:
    """Return layout dict with defaults filled. Unknown keys are dropped."""
    if layout is None:
        return dict(DEFAULT_LAYOUT)
    out = dict(DEFAULT_LAYOUT)
    out.update({k: str(v) for k, v in layout.items() if k in out})
    return out


@dataclass(frozen=True)
class DeployConfig:
    """Everything one setup run needs, computed once at startup."""

    project_root: Path
    compose_file: Path
    overlay_file: Path
    env_file: Path
    dockerfile: Path
    config_dir: str
    workspace_dir: str
    gateway_port: str = DEFAULT_GATEWAY_PORT
    bridge_port: str = DEFAULT_BRIDGE_PORT
    gateway_bind: str = DEFAULT_GATEWAY_BIND
    gateway_token: str | None = None
    image: str = DEFAULT_IMAGE
    extra_mounts: str = ""
    home_volume: str = ""
    apt_packages: str = ""

    def env_values(self) -> dict[str, str | None]:
        """Current value per recognized key, in ENV_KEYS order. None means undefined."""
        return {
            "OPENCLAW_CONFIG_DIR": self.config_dir,
            "OPENCLAW_WORKSPACE_DIR": self.workspace_dir,
            "OPENCLAW_GATEWAY_PORT": self.gateway_port,
            "OPENCLAW_BRIDGE_PORT": self.bridge_port,
            "OPENCLAW_GATEWAY_BIND": self.gateway_bind,
            "OPENCLAW_GATEWAY_TOKEN": self.gateway_token,
            "OPENCLAW_IMAGE": self.image,
            "OPENCLAW_EXTRA_MOUNTS": self.extra_mounts,
            "OPENCLAW_HOME_VOLUME": self.home_volume,
            "OPENCLAW_DOCKER_APT_PACKAGES": self.apt_packages,
        }

    def with_token(self, token: str) -> DeployConfig:
        return replace(self, gateway_token=token)


def load_config(
    environ: Mapping[str, str] | None = None,
    *,
    project_root: Path | None = None,
    home: Path | None = None,
    layout: dict[str, Any] | None = None,
) -> DeployConfig:
    """Build a DeployConfig from environment variables (default os.environ) and defaults.

    Empty OPENCLAW_GATEWAY_TOKEN is treated as unset so a token gets generated.
    """
    env = os.environ if environ is None else environ
    root = (project_root or Path.cwd()).resolve()
    if home is None:
        home = Path(env["HOME"]) if env.get("HOME") else Path.home()
    files = resolve_layout(layout)
    config_dir = env.get("OPENCLAW_CONFIG_DIR") or str(home / ".openclaw")
    workspace_dir = env.get("OPENCLAW_WORKSPACE_DIR") or str(home / ".openclaw" / "workspace")
    return DeployConfig(
        project_root=root,
        compose_file=root / files["compose_file"],
        overlay_file=root / files["overlay_file"],
        env_file=root / files["env_file"],
        dockerfile=root / files["dockerfile"],
        config_dir=config_dir,
        workspace_dir=workspace_dir,
        gateway_port=env.get("OPENCLAW_GATEWAY_PORT") or DEFAULT_GATEWAY_PORT,
        bridge_port=env.get("OPENCLAW_BRIDGE_PORT") or DEFAULT_BRIDGE_PORT,
        gateway_bind=env.get("OPENCLAW_GATEWAY_BIND") or DEFAULT_GATEWAY_BIND,
        gateway_token=env.get("OPENCLAW_GATEWAY_TOKEN") or None,
        image=env.get("OPENCLAW_IMAGE") or DEFAULT_IMAGE,
        extra_mounts=env.get("OPENCLAW_EXTRA_MOUNTS", ""),
        home_volume=env.get("OPENCLAW_HOME_VOLUME", ""),
        apt_packages=env.get("OPENCLAW_DOCKER_APT_PACKAGES", ""),
    )
