"""
WFCGen - run.py
Main entry point: opens the board viewer, or prints one board with --print.
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from engine.board import generate
from engine.data_loader import get_settings, get_tile_type
from engine.logging_config import setup_logging
from engine.propagation import Contradiction


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Wave-function-collapse tile board generator"
    )
    parser.add_argument("--config", type=Path, help="Settings TOML (default: data/settings.toml)")
    parser.add_argument("--size", type=int, help="Board width and height in tiles")
    parser.add_argument("--seed", type=int, help="Seed for reproducible boards")
    parser.add_argument("--trace", action="store_true", help="Log the possibility grid at every step (implies --debug)")
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print one board as text and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-dir", type=Path, help="Also write logs to a rotating file here")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    console_level = logging.DEBUG if (args.debug or args.trace) else logging.WARNING
    setup_logging(args.log_dir, console_level=console_level)

    settings = get_settings(args.config)
    overrides = {}
    if args.size is not None:
        overrides["size"] = args.size
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.trace:
        overrides["trace"] = True
    if overrides:
        generation = settings.generation.model_validate(settings.generation.model_dump() | overrides)
        settings = settings.model_copy(update={"generation": generation})

    tile_type = get_tile_type(settings.generation.tile_set)

    if args.print_only:
        gen = settings.generation
        try:
            board = generate(tile_type, gen.size, rng=random.Random(gen.seed), trace=gen.trace)
        except Contradiction as exc:
            print(f"Generation failed: {exc}", file=sys.stderr)
            return 1
        print(board.to_text())
        return 0

    from ui.renderer import Renderer, console_size
    from ui.states import App
    from ui.screens import BoardViewState

    width, height = console_size(settings.generation.size, settings.generation.size, settings.display)
    renderer = Renderer(width=width, height=height, title=settings.display.title)
    app = App(renderer=renderer)
    app.change_state(BoardViewState(app, tile_type, settings))
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
