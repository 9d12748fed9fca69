"""
GlyphEngine - run.py
Main entry point: loads the configuration and runs the title screen.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure we can import the engine packages
project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))

from display.backend import make_backend
from display.screens import TitleScreen
from engine.data_loader import get_engine_config
from engine.errors import PlatformError
from engine.log import configure_logging
from engine.loop import GameEngine

logger = logging.getLogger("glyphengine")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the GlyphEngine title screen.")
    parser.add_argument("--config", type=Path, default=None, help="engine TOML file (default: data/engine.toml)")
    parser.add_argument("--backend", choices=["tcod", "headless"], default=None, help="override the configured backend")
    parser.add_argument("--frames", type=int, default=None, help="stop after N frames (scripted runs)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_engine_config(args.config)
    configure_logging(config.logging.level, config.logging.file)

    display = config.display
    backend_name = args.backend or display.backend
    if backend_name == "tcod":
        backend = make_backend("tcod", title=display.title, tileset=display.tileset, vsync=display.vsync)
    else:
        backend = make_backend(backend_name)

    try:
        engine = GameEngine.from_config(TitleScreen(), backend, display)
        if args.frames is None:
            engine.run()
        else:
            for _ in range(args.frames):
                engine.tick()
    except PlatformError as exc:
        logger.critical("Display backend failure: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
