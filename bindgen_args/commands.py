"""Command-line interface handler for bindgen-args."""

import sys
import os
import json
import argparse

from . import options
from . import shlex_parser
from .diagnostics import ConsoleDiagnostics


def default_options_path() -> str:
    """Get the default options file path."""
    return os.path.realpath("bindgen.toml")


def print_usage() -> None:
    """Print usage information."""
    print("""Usage: bgargs [-h | --help] <command> [<args>]

Commands:
  split [--] <string>      Split an argument string and print the tokens as JSON
                           Words after split are joined with spaces; use -- before
                           a string that starts with -h

  check [<file>]           Validate an options file (default ./bindgen.toml)

  args [<file>]            Print the clang arguments built from an options file
      -s, --system-includes
                           Add clang's system include directories with -idirafter
      --clang PATH         The clang executable to query (default clang)
      -o, --output FILE    Write the arguments to FILE as a JSON array

  help                     Show this help message
  version                  Show program version
""")


def print_version() -> None:
    """Print version information."""
    print("0.1")


def cmd_split(args: argparse.Namespace) -> None:
    """Execute the split command."""
    if args.string is None:
        print("Please specify a string to split\n", file=sys.stderr)
        print_usage()
        sys.exit(1)

    print(json.dumps(shlex_parser.tokenize(args.string)))


def cmd_check(args: argparse.Namespace) -> None:
    """Execute the check command."""
    path = args.file if args.file else default_options_path()

    diagnostics = ConsoleDiagnostics()
    try:
        opts = options.load_options(path, diagnostics)
    except options.ValidationFailed:
        sys.exit(1)

    # Print statistics with colored output
    magenta = "\x1b[35m"
    reset = "\x1b[0m"

    print(f"{magenta}┃{reset} {len(opts.headers):<6} Headers")
    print(f"{magenta}┃{reset} {len(opts.clang_args):<6} Clang args")
    print(f"{magenta}┃{reset} {len(opts.links):<6} Links")
    print(f"{magenta}┃{reset} {diagnostics.warning_count:<6} Warnings")


def cmd_args(args: argparse.Namespace) -> None:
    """Execute the args command."""
    path = args.file if args.file else default_options_path()

    system_includes = None
    if args.system_includes:
        try:
            system_includes = options.find_clang_search_paths(args.clang)
        except options.ClangNotFound as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    try:
        opts = options.load_options(path, ConsoleDiagnostics(), system_includes)
    except options.ValidationFailed:
        sys.exit(1)

    argv = opts.command_line()
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(argv, f, indent=2)
            f.write("\n")
    else:
        for arg in argv:
            print(arg)


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Binding generator argument tool", add_help=False
    )

    # Add global help
    parser.add_argument("-h", "--help", action="store_true", help="Show help message")

    # Add subparsers for commands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Split command
    split_parser = subparsers.add_parser("split", add_help=False)
    split_parser.add_argument(
        "-h", "--help", action="store_true", help="Show help for split"
    )
    split_parser.add_argument("string", nargs="?", help="Argument string to split")

    # Check command
    check_parser = subparsers.add_parser("check", add_help=False)
    check_parser.add_argument(
        "-h", "--help", action="store_true", help="Show help for check"
    )
    check_parser.add_argument("file", nargs="?", help="Options file path")

    # Args command
    args_parser = subparsers.add_parser("args", add_help=False)
    args_parser.add_argument(
        "-h", "--help", action="store_true", help="Show help for args"
    )
    args_parser.add_argument(
        "-s",
        "--system-includes",
        action="store_true",
        dest="system_includes",
        help="Add clang's system include directories",
    )
    args_parser.add_argument(
        "--clang", type=str, default="clang", help="Clang executable"
    )
    args_parser.add_argument("-o", "--output", type=str, help="Output file path")
    args_parser.add_argument("file", nargs="?", help="Options file path")

    # Help command
    subparsers.add_parser("help", add_help=False)

    # Version command
    subparsers.add_parser("version", add_help=False)

    # Parse arguments
    if len(sys.argv) < 2:
        print_usage()
        return

    args, extras = parser.parse_known_args()

    # Clang arguments look like options, so split takes its words unparsed
    if args.command == "split":
        words = sys.argv[2:]
        if words[:1] == ["--"]:
            words = words[1:]
        args.string = " ".join(words) if words else None
    elif extras:
        parser.error(f"unrecognized arguments: {' '.join(extras)}")

    # Handle global help
    if args.help or args.command == "help":
        print_usage()
        return

    # Handle version
    if args.command == "version":
        print_version()
        return

    # Execute commands
    if args.command == "split":
        cmd_split(args)
    elif args.command == "check":
        cmd_check(args)
    elif args.command == "args":
        cmd_args(args)
    else:
        print_usage()
