"""Errors raised by openclaw_docker. The CLI turns these into exit code 1."""

from __future__ import annotations


class SetupError(RuntimeError):
    pass


class MissingPrerequisiteError(SetupError):
    """A required external tool (docker, docker compose) is not available."""


class TokenError(SetupError):
    """No randomness source could produce a gateway token."""
