"""A very tiny CLI.

Invoke using e.g. ``python -m shadergen version`` or ``python -m shadergen methods particle``.
"""

import sys
import argparse

import shadergen


def print_methods(family_name):
    schema = shadergen.get_family(family_name).schema
    for method in schema.methods:
        options = ", ".join(option.name for option in method.options)
        print(f"{method.name} ({method.option_count}): {options}")


def main(argv=None):
    # Get argv so we can massage it
    if argv is None:
        argv = sys.argv[1:]

    # Defaults and aliases
    if not argv:
        argv = ["help"]
    if argv == ["--version"]:
        argv = ["version"]

    # Let the rest to argparse

    parser = argparse.ArgumentParser(
        prog="shadergen",
        description="The (very basic) shadergen CLI",
    )

    parser.add_argument(
        "command",
        action="store",
        help="The command to run: 'help', 'version', 'families' or 'methods'",
    )
    parser.add_argument(
        "family", action="store", nargs="?", help="The family for 'methods'"
    )

    args = parser.parse_args(argv)
    command = args.command.lower()

    if command == "help":
        parser.print_help()
    elif command == "version":
        print("shadergen v" + shadergen.__version__)
    elif command == "families":
        for name in shadergen.family_names():
            print(name)
    elif command == "methods":
        if not args.family:
            print("The 'methods' command needs a family name")
            return 1
        try:
            print_methods(args.family)
        except ValueError as err:
            print(err)
            return 1
    else:
        print(f"Invalid command '{command}'")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
