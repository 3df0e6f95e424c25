#!/usr/bin/env python3
"""
CLI for running pyrtle turtle programs.

Usage:
    python -m pyrtle run PROGRAM.yaml [--screenshot FILE.png] [--size WxH] [--window] [--json]
    python -m pyrtle builtins

Examples:
    # Draw headlessly and save the result
    python -m pyrtle run square.yaml --screenshot square.png

    # Watch the drawing in a window
    python -m pyrtle run square.yaml --window --size 800x800
"""

import argparse
import json
import sys
from pathlib import Path

import yaml

from .config import ScreenConfig
from .errors import TurtleRuntimeError


def cmd_run(args):
    """Run a program file."""
    from .io.png import write_png
    from .runtime import Program, load_program, run_program, unwrap_value

    source_path = Path(args.file)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return 2

    try:
        program = load_program(source_path)
        config = program.screen.override(size=args.size, title=args.title)
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    program = Program(steps=program.steps, screen=config, source=program.source)

    if args.window:
        from .pyglet_drawable import PygletScreen
        screen_factory = PygletScreen
    else:
        from .raster_drawable import RasterScreen
        screen_factory = RasterScreen

    result, turtle = run_program(program, screen_factory=screen_factory,
                                 keep_going=args.keep_going)

    if args.json:
        report = {
            "file": str(source_path),
            "success": result.success,
            "steps_executed": result.steps_executed,
            "last_value": unwrap_value(result.last_value),
        }
        report.update(result.diagnostics.to_json())
        print(json.dumps(report, indent=2))
    elif result.diagnostics.diagnostics:
        print(result.diagnostics.format_all(), file=sys.stderr)

    status = 0 if result.success else 1
    if args.screenshot:
        try:
            write_png(turtle.screen.capture_bitmap(), args.screenshot)
            if not args.json:
                print(f"Saved {args.screenshot}")
        except TurtleRuntimeError as e:
            print(f"Error: {e}", file=sys.stderr)
            status = 1

    if not args.json:
        if not result.success:
            print(f"Run failed after {result.steps_executed} step(s): {result.error_message}",
                  file=sys.stderr)
        else:
            print(f"OK: {source_path.name} - {result.steps_executed} step(s)")

    if args.window:
        turtle.screen.show_until_closed()
    return status


def cmd_builtins(args):
    """List the builtin functions."""
    from .runtime import get_builtin_registry

    for func in get_builtin_registry().functions():
        params = ", ".join(func.params)
        line = f"  {func.name}({params})"
        if func.aliases:
            line += f" [aka {', '.join(func.aliases)}]"
        print(f"{line:<44} {func.doc}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='python -m pyrtle',
        description='pyrtle turtle graphics runner',
    )

    subparsers = parser.add_subparsers(dest='action', required=True)

    # run command
    run_parser = subparsers.add_parser('run', help='Run a program file')
    run_parser.add_argument('file', help='Program file (YAML or JSON)')
    run_parser.add_argument('-s', '--screenshot', metavar='FILE',
                            help='Save the final screen as PNG')
    run_parser.add_argument('--size', metavar='WxH',
                            help=f'Screen size (default {ScreenConfig().width}x{ScreenConfig().height})')
    run_parser.add_argument('--title', help='Window title')
    run_parser.add_argument('-w', '--window', action='store_true',
                            help='Show the drawing in a window')
    run_parser.add_argument('-k', '--keep-going', action='store_true',
                            help='Report failing steps and continue')
    run_parser.add_argument('--json', action='store_true',
                            help='Print the run result and diagnostics as JSON')

    # builtins command
    subparsers.add_parser('builtins', help='List builtin functions')

    args = parser.parse_args(argv)

    if args.action == 'run':
        return cmd_run(args)
    elif args.action == 'builtins':
        return cmd_builtins(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
