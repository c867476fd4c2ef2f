"""Handlers for 'selectkit filter' and 'selectkit check' commands."""

from selectkit.cli._common import (
    format_option_line,
    load_config_or_die,
    option_to_dict,
    output_json,
    setup_logging,
)
from selectkit.model.controller import empty_message


def filter_options(args) -> int:
    """Show what the widget would list for a query, optionally after key presses."""
    setup_logging(args.verbose)
    config = load_config_or_die(args.config, args.json)
    # Headless: no event loop to debounce on
    controller = config.build_controller(debounce_delay=0)

    controller.on_trigger_activate()
    if args.query:
        controller.on_query_input(args.query)
    for key in args.keys or []:
        controller.on_key_down(key)

    options = controller.filtered_options
    if args.json:
        output_json(
            {
                "query": controller.query,
                "open": controller.is_open,
                "options": [option_to_dict(o) for o in options] if controller.is_open else [],
                "highlighted": controller.active_option_value if controller.is_open else None,
                "selection": controller.selection,
                "empty": empty_message(controller),
            }
        )
        return 0

    if controller.is_open:
        for index, option in enumerate(options):
            line = format_option_line(option, selected=controller.is_selected(option.value))
            pointer = ">" if index == controller.highlight_index else " "
            print(f"{pointer}{line}")
        message = empty_message(controller)
        if message:
            print(message)
    print(f"selection: {', '.join(controller.selection) or '(none)'}")
    return 0


def check_config(args) -> int:
    """Validate a config file. Exit 1 if any option had to be skipped."""
    setup_logging(args.verbose)
    config = load_config_or_die(args.config, args.json)
    result = {
        "mode": config.mode.value,
        "options": len(config.options),
        "disabled": sum(1 for o in config.options if o.disabled),
        "skipped": config.skipped,
    }
    if args.json:
        output_json(result)
    else:
        print(f"mode: {result['mode']}")
        print(f"options: {result['options']} ({result['disabled']} disabled)")
        if config.skipped:
            print(f"skipped: {config.skipped} malformed or duplicate")
    return 1 if config.skipped else 0
