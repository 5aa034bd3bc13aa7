"""Compose overlay (docker-compose.extra.yml) for a home volume and extra bind mounts.

The overlay is kept as a small document model (service -> ordered mount list,
plus optional top-level named volumes) and serialized once with PyYAML, so the
same inputs always render to the same bytes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

log = logging.getLogger(__name__)

SERVICES: tuple[str, ...] = ("openclaw-gateway", "openclaw-cli")
CONTAINER_HOME = "/home/node"
CONTAINER_CONFIG_DIR = f"{CONTAINER_HOME}/.openclaw"
CONTAINER_WORKSPACE_DIR = f"{CONTAINER_CONFIG_DIR}/workspace"


@dataclass
class ComposeOverlay:
    services: dict[str, list[str]] = field(default_factory=dict)
    named_volumes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Compose mapping: services.<name>.volumes, then top-level volumes if any."""
        doc: dict[str, Any] = {
            "services": {name: {"volumes": list(mounts)} for name, mounts in self.services.items()}
        }
        if self.named_volumes:
            doc["volumes"] = {name: {} for name in self.named_volumes}
        return doc

    def render(self) -> str:
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)


def is_named_volume(name: str) -> bool:
    """A bare name (no '/') is an engine-managed volume; anything with '/' is a host path."""
    return bool(name) and "/" not in name


def synthesize_overlay(
    home_volume: str,
    mounts: Sequence[str],
    *,
    config_dir: str,
    workspace_dir: str,
) -> ComposeOverlay | None:
    """Build the overlay for both services, or None when there is nothing to mount.

    With a home volume, each service first gets the volume at /home/node and
    the config/workspace dirs re-bound beneath it, then every extra mount in order.
    """
    if not home_volume and not mounts:
        log.debug("No home volume or extra mounts; overlay not needed")
        return None
    volumes: list[str] = []
    if home_volume:
        volumes.extend(
            [
                f"{home_volume}:{CONTAINER_HOME}",
                f"{config_dir}:{CONTAINER_CONFIG_DIR}",
                f"{workspace_dir}:{CONTAINER_WORKSPACE_DIR}",
            ]
        )
    volumes.extend(mounts)
    overlay = ComposeOverlay(services={name: list(volumes) for name in SERVICES})
    if is_named_volume(home_volume):
        overlay.named_volumes.append(home_volume)
    return overlay


def write_overlay(path: Path, overlay: ComposeOverlay) -> None:
    """Write the rendered overlay, replacing any previous file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(overlay.render(), encoding="utf-8")
    log.debug("Wrote compose overlay %s (%d services)", path, len(overlay.services))
