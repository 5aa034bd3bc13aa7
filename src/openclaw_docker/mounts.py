"""Parse OPENCLAW_EXTRA_MOUNTS (comma-separated volume clauses)."""

from __future__ import annotations


def parse_mount_specs(raw: str | None) -> list[str]:
    """Split on commas, strip each piece, drop empty ones. Order is preserved.

    Mount syntax itself is not validated; each clause is passed to compose as-is.
    """
    if not raw:
        return []
    return [piece.strip() for piece in raw.split(",") if piece.strip()]
