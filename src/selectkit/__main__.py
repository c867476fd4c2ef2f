"""Entry point for selectkit CLI."""

import sys

NOUNS = {"filter", "check"}


def main():
    # No subcommand or non-noun argument = demo TUI
    if len(sys.argv) < 2 or (sys.argv[1] not in NOUNS and not sys.argv[1].startswith("-")):
        from selectkit.cli._common import load_config_or_die
        from selectkit.ui import SelectkitApp

        path = sys.argv[1] if len(sys.argv) > 1 else None
        app = SelectkitApp(load_config_or_die(path, json_mode=False))
        app.run()
        return

    from selectkit.cli import build_parser

    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
