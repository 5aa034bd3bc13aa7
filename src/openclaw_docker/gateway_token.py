"""Gateway token: keep an existing one, else 32 random bytes as 64 lowercase hex chars."""

from __future__ import annotations

import logging
import re
import secrets
import shutil
import subprocess

from openclaw_docker.errors import TokenError

log = logging.getLogger(__name__)

TOKEN_BYTES = 32
_TOKEN_RE = re.compile(r"^[0-9a-f]{64}$")


def is_valid_token(value: str | None) -> bool:
    """True when value is 64 lowercase hex characters."""
    return bool(value) and _TOKEN_RE.match(value) is not None


def _openssl_token() -> str | None:
    """Token from `openssl rand -hex 32`, or None when openssl is missing or misbehaves."""
    if not shutil.which("openssl"):
        return None
    try:
        r = subprocess.run(
            ["openssl", "rand", "-hex", str(TOKEN_BYTES)],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        log.debug("openssl rand failed to start: %s", e)
        return None
    out = (r.stdout or "").strip()
    if r.returncode != 0 or not is_valid_token(out):
        log.debug("openssl rand unusable (exit %s)", r.returncode)
        return None
    return out


def generate_token() -> str:
    """Generate a new token: openssl when available, else the secrets module. Raises TokenError."""
    token = _openssl_token()
    if token is not None:
        log.debug("Generated gateway token with openssl")
        return token
    try:
        token = secrets.token_hex(TOKEN_BYTES)
    except NotImplementedError as e:
        msg = "No randomness source available to generate a gateway token"
        raise TokenError(msg) from e
    log.debug("Generated gateway token with secrets.token_hex")
    return token


def provision_token(existing: str | None) -> str:
    """Return existing unchanged when set; otherwise generate a fresh token."""
    if existing:
        return existing
    return generate_token()
