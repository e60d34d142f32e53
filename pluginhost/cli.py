"""
pluginhost-render - Render a plugin into a host and print the result.

Usage:
    pluginhost-render <plugin.py> [--data JSON | --data-file FILE] [--query Q]
    pluginhost-render --init-config config/pluginhost.toml

Toasts raised by the plugin are printed to stderr.
"""

import argparse
import dataclasses
import json
import sys
from pathlib import Path

import pluginhost.config
from pluginhost.core.box import Box
from pluginhost.events import EventKind
from pluginhost.plugin.loader import LoaderError, load_plugin_module
from pluginhost.renderer import build_host


class CLIError(Exception):
    """Base exception for CLI errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pluginhost-render",
        description="Mount a plugin, optionally apply a search query, print the render tree",
    )
    parser.add_argument("plugin", nargs="?", help="Path to the plugin's Python file")

    data = parser.add_mutually_exclusive_group()
    data.add_argument("--data", help="Plugin data as a JSON document")
    data.add_argument("--data-file", type=Path, help="File holding the plugin data as JSON")

    parser.add_argument("--query", help="Search query applied after mounting")
    parser.add_argument(
        "--path", help="Plugin locator used for the stylesheet (default: the plugin file)"
    )
    parser.add_argument(
        "--module-suffix",
        help="Module suffix replaced by the stylesheet suffix (default: the plugin file's suffix unless --path is given)",
    )
    parser.add_argument("-c", "--config", type=Path, help="TOML settings file")
    parser.add_argument(
        "--init-config", type=Path, metavar="FILE", help="Write default settings to FILE and exit"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def _read_data(args: argparse.Namespace):
    try:
        if args.data is not None:
            return json.loads(args.data)
        if args.data_file is not None:
            return json.loads(args.data_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CLIError(f"Invalid plugin data: {e}") from e
    except OSError as e:
        raise CLIError(f"Cannot read plugin data: {e}") from e
    return None


def _print_toast(content: Box) -> None:
    print(f"toast: {json.dumps(content.into_or(None), default=str)}", file=sys.stderr)


def render_command(args: argparse.Namespace) -> int:
    """
    Execute the render flow.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if not args.plugin:
        raise CLIError("No plugin file specified")

    try:
        settings = pluginhost.config.load(args.config)
    except pluginhost.config.ConfigError as e:
        raise CLIError(str(e)) from e
    if args.module_suffix:
        settings = dataclasses.replace(settings, module_suffix=args.module_suffix)
    elif args.path is None:
        # The plugin file is the locator, so its stylesheet sits beside it
        settings = dataclasses.replace(
            settings, module_suffix=Path(args.plugin).suffix or ".py"
        )

    try:
        plugin = load_plugin_module(args.plugin)
    except LoaderError as e:
        raise CLIError(str(e)) from e

    data = _read_data(args)
    store, renderer = build_host(settings)
    store.bus.subscribe(EventKind.TOAST, _print_toast)

    store.activate(plugin, args.path or args.plugin, data)
    if args.query is not None:
        store.set_search_query(args.query)

    if args.verbose:
        print(f"Mounted {args.plugin} (loader visible: {renderer.loader_visible})", file=sys.stderr)
    print(renderer.to_html())
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for pluginhost-render."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        if args.init_config is not None:
            pluginhost.config.write_default_config(args.init_config)
            print(f"Wrote default settings to {args.init_config}")
            return 0

        return render_command(args)

    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
