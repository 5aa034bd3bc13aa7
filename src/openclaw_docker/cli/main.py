"""Main CLI entry point for openclaw-docker."""

import logging
import sys

from openclaw_docker.cli import setup_cmd

USAGE = """Usage: openclaw-docker [--verbose] <command> [args...]
Commands:
  setup    - Prepare dirs, token, overlay and .env; build, onboard and start the gateway
  overlay  - Print the compose overlay for OPENCLAW_HOME_VOLUME / OPENCLAW_EXTRA_MOUNTS
  env      - Reconcile .env with the current environment only
  token    - Print a new gateway token
Options: --project-root PATH, --compose-file F, --overlay-file F, --env-file F, --dockerfile F
setup also accepts --dry-run (print docker commands instead of running them)"""


def main() -> None:
    """Main CLI entry point."""
    args = sys.argv[1:]
    if args and args[0] == "--verbose":
        args = args[1:]
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if not args:
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    command, rest = args[0], args[1:]
    if command == "setup":
        setup_cmd.run_setup_argv(rest)
    elif command == "overlay":
        setup_cmd.run_overlay_argv(rest)
    elif command == "env":
        setup_cmd.run_env_argv(rest)
    elif command == "token":
        setup_cmd.run_token_argv(rest)
    elif command in ("-h", "--help", "help"):
        print(USAGE)
        sys.exit(0)
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
