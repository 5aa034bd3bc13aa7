"""Shared CLI argument parsing: --project-root and the layout file overrides."""

from __future__ import annotations

from pathlib import Path

# --flag -> layout key (see openclaw_docker.config.DEFAULT_LAYOUT).
LAYOUT_FLAGS: dict[str, str] = {
    "--compose-file": "compose_file",
    "--overlay-file": "overlay_file",
    "--env-file": "env_file",
    "--dockerfile": "dockerfile",
}


def parse_layout_argv(argv: list[str]) -> tuple[Path, dict[str, str] | None, list[str]]:
    """Split argv into (project_root, layout overrides or None, remaining args).

    --project-root defaults to the current directory and is resolved to an
    absolute path. Layout file names stay relative to it. A flag with no
    value after it is left in the remaining args.
    """
    project_root = Path.cwd()
    layout: dict[str, str] = {}
    rest: list[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        has_value = i + 1 < len(argv)
        if arg == "--project-root" and has_value:
            project_root = Path(argv[i + 1])
            i += 2
        elif arg in LAYOUT_FLAGS and has_value:
            layout[LAYOUT_FLAGS[arg]] = argv[i + 1]
            i += 2
        else:
            rest.append(arg)
            i += 1
    return project_root.resolve(), layout or None, rest
