"""Command-line interface for pointerbridge.

Provides the entry point for running the HTTP server, querying the
pointer position, and recording, editing or replaying macros.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="pointerbridge",
        description="HTTP control surface for xdotool pointer/keyboard automation",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/pointerbridge.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--url", type=str, default=None,
        help="Server base URL for client commands (default: client.base_url from config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP automation server")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Listen port")

    pos_parser = subparsers.add_parser("pos", help="Print the current pointer position")
    pos_parser.add_argument(
        "--delay", type=int, default=None,
        help="Wait this many seconds (server side) before reading the position",
    )

    record_parser = subparsers.add_parser("record", help="Append a step to a macro file")
    record_parser.add_argument("macro", type=Path, help="Macro YAML file (created if missing)")
    record_parser.add_argument(
        "kind", choices=["tap", "drag", "type", "key", "wait"],
        help="Step kind",
    )
    record_parser.add_argument(
        "text", nargs="?", default="",
        help="Text to type (type) or key name/combo (key)",
    )
    record_parser.add_argument("--button", type=str, default="left")
    record_parser.add_argument(
        "--capture-delay", type=int, default=3,
        help="Seconds to position the pointer before tap/drag points are read",
    )
    record_parser.add_argument(
        "--delay-ms", type=int, default=0,
        help="Pause after the step (0 = macro default)",
    )
    record_parser.add_argument("--duration-ms", type=int, default=600, help="Drag duration")
    record_parser.add_argument("--steps", type=int, default=30, help="Drag interpolation steps")

    play_parser = subparsers.add_parser("play", help="Replay a macro file")
    play_parser.add_argument("macro", type=Path, help="Macro YAML file")
    play_parser.add_argument(
        "--loops", type=int, default=None,
        help="Number of runs (0 = until interrupted; default: from macro file)",
    )

    list_parser = subparsers.add_parser("list", help="Show the steps of a macro file")
    list_parser.add_argument("macro", type=Path, help="Macro YAML file")

    delete_parser = subparsers.add_parser("delete", help="Remove one step from a macro file")
    delete_parser.add_argument("macro", type=Path, help="Macro YAML file")
    delete_parser.add_argument("index", type=int, help="Step number as shown by 'list'")

    move_parser = subparsers.add_parser("move", help="Swap a step with its neighbour")
    move_parser.add_argument("macro", type=Path, help="Macro YAML file")
    move_parser.add_argument("index", type=int, help="Step number as shown by 'list'")
    move_parser.add_argument("direction", choices=["up", "down"])

    clear_parser = subparsers.add_parser("clear", help="Remove every step from a macro file")
    clear_parser.add_argument("macro", type=Path, help="Macro YAML file")

    return parser.parse_args(argv)


def _client(settings, args):  # type: ignore[no-untyped-def]
    from pointerbridge.client import PointerClient

    return PointerClient(
        base_url=args.url or settings.client.base_url,
        timeout=settings.client.timeout,
    )


async def _print_position(settings, args) -> None:
    async with _client(settings, args) as pc:
        if args.delay is None:
            x, y = await pc.position()
        else:
            x, y = await pc.capture(args.delay)
    print(f"x={x} y={y}")


async def _record(settings, args) -> None:
    """Record one step and append it to the macro file."""
    from pointerbridge.macro.models import KeyStep, Macro, TypeStep, WaitStep
    from pointerbridge.macro.recorder import record_drag, record_tap
    from pointerbridge.macro.store import load_macro, save_macro

    if args.macro.exists():
        macro = load_macro(args.macro)
    else:
        macro = Macro(name=args.macro.stem, action_delay_ms=settings.macro.action_delay_ms)

    if args.kind in ("type", "key") and not args.text:
        raise SystemExit(f"'{args.kind}' steps need TEXT")

    if args.kind == "tap":
        async with _client(settings, args) as pc:
            print(f"Position the pointer... ({args.capture_delay}s)")
            step = await record_tap(
                pc, args.capture_delay, button=args.button, delay_ms=args.delay_ms
            )
    elif args.kind == "drag":
        async with _client(settings, args) as pc:
            print(f"Position the pointer at the start, then the end ({args.capture_delay}s each)")
            step = await record_drag(
                pc, args.capture_delay,
                button=args.button,
                duration_ms=args.duration_ms,
                steps=args.steps,
                delay_ms=args.delay_ms,
            )
    elif args.kind == "type":
        step = TypeStep(text=args.text, delay_ms=args.delay_ms)
    elif args.kind == "key":
        step = KeyStep(text=args.text, delay_ms=args.delay_ms)
    else:
        step = WaitStep(delay_ms=args.delay_ms)

    macro.steps.append(step)
    save_macro(macro, args.macro)
    print(f"Added {step.kind} step #{len(macro.steps)} to {args.macro}")


async def _play(settings, args) -> None:
    from pointerbridge.macro.player import MacroPlayer
    from pointerbridge.macro.store import load_macro

    macro = load_macro(args.macro)
    async with _client(settings, args) as pc:
        runs = await MacroPlayer(pc).run(macro, loops=args.loops)
    print(f"Completed {runs} run(s) of {macro.name}")


def _edit(args: argparse.Namespace) -> None:
    """Run one of the offline macro editing commands."""
    from pointerbridge.macro.store import MacroError, load_macro, save_macro

    try:
        macro = load_macro(args.macro)
    except MacroError as e:
        raise SystemExit(str(e)) from e

    if args.command == "list":
        print(f"{macro.name}: {len(macro.steps)} step(s), loops={macro.loops}")
        for line in macro.describe_steps():
            print(line)
        return

    try:
        if args.command == "delete":
            step = macro.delete_step(args.index)
            print(f"Deleted {step.kind} step #{args.index}")
        elif args.command == "move":
            if not macro.move_step(args.index, args.direction):
                print(f"Step #{args.index} is already at the {'top' if args.direction == 'up' else 'bottom'}")
                return
            print(f"Moved step #{args.index} {args.direction}")
        else:
            print(f"Cleared {macro.clear_steps()} step(s)")
    except IndexError as e:
        raise SystemExit(str(e)) from e

    save_macro(macro, args.macro)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the pointerbridge CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from pointerbridge.config.settings import load_settings
    from pointerbridge.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "serve":
        if args.host:
            settings.server.host = args.host
        if args.port:
            settings.server.port = args.port
        logger.info("Starting pointer server")
        from pointerbridge.server.app import main as serve

        serve(settings)

    elif args.command == "pos":
        asyncio.run(_print_position(settings, args))

    elif args.command == "record":
        asyncio.run(_record(settings, args))

    elif args.command == "play":
        logger.info("Playing macro %s", args.macro)
        try:
            asyncio.run(_play(settings, args))
        except KeyboardInterrupt:
            print("\nStopped")

    elif args.command in ("list", "delete", "move", "clear"):
        _edit(args)


if __name__ == "__main__":
    main()
