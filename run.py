"""Dungeon Crawl level tool.

Loads level files with the same validation the game uses and prints either a
pass/fail report or a coloured rendering of the map. Settings come from
flags, ``CRAWLER_*`` environment variables and an optional .env file.

Run `python run.py --help` for details.
"""

from __future__ import annotations

import argparse
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init

from crawler import __version__
from crawler.config import CrawlerConfig
from crawler.dungeon import Tile, load_level, resize, tile_name
from crawler.errors import CrawlerError
from crawler.logging_utils import configure as configure_logging
from crawler.logging_utils import get_logger

log = get_logger("crawler.cli")

TILE_COLORS = {
    Tile.PLAYER: Fore.GREEN + Style.BRIGHT,
    Tile.MONSTER: Fore.RED + Style.BRIGHT,
    Tile.TREASURE: Fore.YELLOW,
    Tile.AMULET: Fore.MAGENTA,
    Tile.DOOR: Fore.CYAN,
    Tile.EXIT: Fore.CYAN + Style.BRIGHT,
    Tile.PILLAR: Fore.WHITE + Style.BRIGHT,
}

# Tiles tallied in the `show` banner.
COUNTED_TILES = (Tile.MONSTER, Tile.TREASURE, Tile.AMULET, Tile.DOOR, Tile.EXIT)


def parse_args(argv: list[str]) -> argparse.Namespace:
    epilog = dedent(
        """
        Environment variables:
          CRAWLER_CELL_LIMIT   Largest grid (in cells) a load or resize may build
          CRAWLER_LOG_LEVEL    debug | info | warn | error (default: warn)
          CRAWLER_LOG_JSON     Emit JSON log lines when set to 1
          CRAWLER_COLOR        Set to 0 to disable coloured output

        Examples:
          # Validate every level in a directory
          python run.py check levels/*.txt

          # Print a level, doubled twice
          python run.py show levels/level1.txt --resize 2
        """
    )
    parser = argparse.ArgumentParser(
        prog="dungeon-crawl",
        description="Validate and inspect dungeon level files.",
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--env-file", dest="env_file", help="Path to a .env file to load before reading settings")
    parser.add_argument("--version", action="version", version=f"Dungeon Crawl {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Validate one or more level files")
    check_parser.add_argument("paths", nargs="+", help="Level files to validate")

    show_parser = subparsers.add_parser("show", help="Print a level map")
    show_parser.add_argument("path", help="Level file to print")
    show_parser.add_argument(
        "--resize",
        type=int,
        default=0,
        metavar="N",
        help="Double the grid N times before printing (default: 0)",
    )
    show_parser.add_argument("--no-color", action="store_true", help="Disable coloured output")

    return parser.parse_args(argv)


def _paint(tile: Tile, color: bool) -> str:
    if not color or tile not in TILE_COLORS:
        return tile.value
    return f"{TILE_COLORS[tile]}{tile.value}{Style.RESET_ALL}"


def run_check(paths: list[str], cfg: CrawlerConfig) -> int:
    failures = 0
    for path in paths:
        try:
            grid, _player = load_level(path, limit=cfg.cell_limit)
        except CrawlerError as exc:
            failures += 1
            print(f"FAIL {path}: {exc.kind.value}: {exc.message}")
            continue
        print(f"OK   {path} ({grid.rows}x{grid.cols})")
    return 1 if failures else 0


def run_show(path: str, times: int, cfg: CrawlerConfig, color: bool) -> int:
    if times < 0:
        print("[ERROR] --resize must not be negative", file=sys.stderr)
        return 2
    try:
        grid, player = load_level(path, limit=cfg.cell_limit)
        for _ in range(times):
            grid = resize(grid, limit=cfg.cell_limit)
    except CrawlerError as exc:
        print(f"[ERROR] {path}: {exc.kind.value}: {exc.message}", file=sys.stderr)
        return 1

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if color else text

    divider = "=" * max(20, grid.cols)
    lines = [
        divider,
        f"{label('Level:')} {path}",
        f"{label('Size:')} {grid.rows}x{grid.cols}",
        f"{label('Start:')} {player.row},{player.col}",
        f"{label('Tiles:')} " + " ".join(f"{tile_name(t)}={grid.count(t)}" for t in COUNTED_TILES),
        divider,
    ]
    lines.extend("".join(_paint(t, color) for t in row) for row in grid.rows_iter())
    print("\n".join(lines))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    try:
        cfg = CrawlerConfig.from_env(args.env_file)
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    configure_logging(cfg.log_level, cfg.log_json)
    log.debug(event="startup", command=args.command, cell_limit=cfg.cell_limit)

    if args.command == "check":
        return run_check(args.paths, cfg)

    color = cfg.color and not args.no_color and sys.stdout.isatty()
    if color:
        _color_init()  # pragma: no cover - terminal dependent
    return run_show(args.path, args.resize, cfg, color)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
