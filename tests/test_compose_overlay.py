"""Tests for openclaw_docker.compose_overlay."""

from pathlib import Path

import yaml

CFG = "/home/me/.openclaw"
WS = "/home/me/.openclaw/workspace"


def _synth(home_volume: str, mounts: list[str]):
    from openclaw_docker.compose_overlay import synthesize_overlay

    return synthesize_overlay(home_volume, mounts, config_dir=CFG, workspace_dir=WS)


class TestSynthesizeOverlay:
    def test_nothing_configured_returns_none(self) -> None:
        assert _synth("", []) is None

    def test_mounts_only_no_home_binds(self) -> None:
        overlay = _synth("", ["/srv/a:/a", "/srv/b:/b:ro"])
        assert overlay is not None
        assert list(overlay.services) == ["openclaw-gateway", "openclaw-cli"]
        for mounts in overlay.services.values():
            assert mounts == ["/srv/a:/a", "/srv/b:/b:ro"]
        assert overlay.named_volumes == []

    def test_home_volume_binds_come_first(self) -> None:
        overlay = _synth("cache1", ["/srv/a:/a"])
        assert overlay.services["openclaw-cli"] == [
            "cache1:/home/node",
            f"{CFG}:/home/node/.openclaw",
            f"{WS}:/home/node/.openclaw/workspace",
            "/srv/a:/a",
        ]
        assert overlay.services["openclaw-gateway"] == overlay.services["openclaw-cli"]

    def test_named_volume_declared(self) -> None:
        overlay = _synth("cache1", [])
        assert overlay.named_volumes == ["cache1"]
        doc = yaml.safe_load(overlay.render())
        assert doc["volumes"] == {"cache1": {}}

    def test_host_path_home_volume_not_declared(self) -> None:
        overlay = _synth("/home/user/data", [])
        assert overlay.named_volumes == []
        doc = yaml.safe_load(overlay.render())
        assert "volumes" not in doc
        assert doc["services"]["openclaw-gateway"]["volumes"][0] == "/home/user/data:/home/node"


class TestRender:
    def test_exact_document_for_single_mount(self) -> None:
        overlay = _synth("", ["/a:/b"])
        assert overlay.render() == (
            "services:\n"
            "  openclaw-gateway:\n"
            "    volumes:\n"
            "    - /a:/b\n"
            "  openclaw-cli:\n"
            "    volumes:\n"
            "    - /a:/b\n"
        )

    def test_deterministic(self) -> None:
        a = _synth("cache1", ["/x:/x", "/y:/y"]).render()
        b = _synth("cache1", ["/x:/x", "/y:/y"]).render()
        assert a == b

    def test_volumes_section_last(self) -> None:
        text = _synth("cache1", ["/x:/x"]).render()
        assert list(yaml.safe_load(text)) == ["services", "volumes"]
        assert text.index("\nvolumes:") > text.index("openclaw-cli")


class TestIsNamedVolume:
    def test_discriminator(self) -> None:
        from openclaw_docker.compose_overlay import is_named_volume

        assert is_named_volume("cache1")
        assert not is_named_volume("/home/user/data")
        assert not is_named_volume("./data")
        assert not is_named_volume("")


class TestWriteOverlay:
    def test_writes_rendered_text(self, tmp_path: Path) -> None:
        from openclaw_docker.compose_overlay import write_overlay

        overlay = _synth("cache1", ["/x:/x"])
        out = tmp_path / "docker-compose.extra.yml"
        write_overlay(out, overlay)
        assert out.read_text() == overlay.render()

    def test_rewrite_is_byte_identical(self, tmp_path: Path) -> None:
        from openclaw_docker.compose_overlay import write_overlay

        out = tmp_path / "docker-compose.extra.yml"
        write_overlay(out, _synth("", ["/x:/x"]))
        first = out.read_bytes()
        write_overlay(out, _synth("", ["/x:/x"]))
        assert out.read_bytes() == first
