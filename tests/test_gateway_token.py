"""Tests for openclaw_docker.gateway_token."""

import re
from unittest.mock import MagicMock, patch

import pytest

HEX64 = re.compile(r"^[0-9a-f]{64}$")


class TestProvisionToken:
    def test_existing_token_passed_through(self) -> None:
        from openclaw_docker.gateway_token import provision_token

        with patch("openclaw_docker.gateway_token.generate_token") as m:
            assert provision_token("my-own-secret") == "my-own-secret"
        m.assert_not_called()

    def test_missing_token_generated(self) -> None:
        from openclaw_docker.gateway_token import provision_token

        with patch("shutil.which", return_value=None):
            got = provision_token(None)
        assert HEX64.match(got)

    def test_empty_token_generated(self) -> None:
        from openclaw_docker.gateway_token import provision_token

        with patch("shutil.which", return_value=None):
            assert HEX64.match(provision_token(""))


class TestGenerateToken:
    def test_uses_openssl_when_available(self) -> None:
        from openclaw_docker.gateway_token import generate_token

        token = "ab" * 32
        with (
            patch("shutil.which", return_value="/usr/bin/openssl"),
            patch("subprocess.run", return_value=MagicMock(returncode=0, stdout=token + "\n")) as m,
        ):
            assert generate_token() == token
        assert m.call_args[0][0] == ["openssl", "rand", "-hex", "32"]

    def test_falls_back_when_openssl_missing(self) -> None:
        from openclaw_docker.gateway_token import generate_token

        with (
            patch("shutil.which", return_value=None),
            patch("subprocess.run") as m,
        ):
            got = generate_token()
        m.assert_not_called()
        assert HEX64.match(got)

    def test_falls_back_when_openssl_fails(self) -> None:
        from openclaw_docker.gateway_token import generate_token

        with (
            patch("shutil.which", return_value="/usr/bin/openssl"),
            patch("subprocess.run", return_value=MagicMock(returncode=1, stdout="")),
        ):
            assert HEX64.match(generate_token())

    def test_falls_back_on_malformed_openssl_output(self) -> None:
        from openclaw_docker.gateway_token import generate_token

        with (
            patch("shutil.which", return_value="/usr/bin/openssl"),
            patch("subprocess.run", return_value=MagicMock(returncode=0, stdout="ABCDEF\n")),
        ):
            got = generate_token()
        assert got != "ABCDEF"
        assert HEX64.match(got)

    def test_raises_when_no_randomness(self) -> None:
        from openclaw_docker.errors import TokenError
        from openclaw_docker.gateway_token import generate_token

        with (
            patch("shutil.which", return_value=None),
            patch("secrets.token_hex", side_effect=NotImplementedError),
            pytest.raises(TokenError),
        ):
            generate_token()

    def test_tokens_differ(self) -> None:
        from openclaw_docker.gateway_token import generate_token

        with patch("shutil.which", return_value=None):
            assert generate_token() != generate_token()


class TestIsValidToken:
    def test_shapes(self) -> None:
        from openclaw_docker.gateway_token import is_valid_token

        assert is_valid_token("0" * 64)
        assert not is_valid_token("A" * 64)
        assert not is_valid_token("0" * 63)
        assert not is_valid_token(None)
