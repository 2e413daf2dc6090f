"""Command-line entry point.

Usage:
    songtag /path/to/song.mp3 [more files] [options]
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from typing import List, Optional

from songtag import logger as log
from songtag.config import ProcessorConfig
from songtag.errors import ConfigError, SongProcessingError
from songtag.pipeline import process_song


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="songtag",
        description="Recognize songs and write artist/title tags into the files.",
    )
    parser.add_argument("files", nargs="+", help="Audio files to tag")
    parser.add_argument(
        "--no-trim",
        action="store_true",
        help="Send the whole file to the recognizer instead of a trimmed clip",
    )
    parser.add_argument("--offset", type=int, help="Trim start offset in seconds")
    parser.add_argument("--length", type=int, help="Trim length in seconds")
    parser.add_argument("--temp-dir", help="Scratch directory for trimmed clips")
    parser.add_argument(
        "--tag-writer", choices=["kid3", "music_tag"], help="Tag writer backend"
    )
    parser.add_argument(
        "--log-level",
        choices=[lvl.lower() for lvl in log.VALID_LEVELS],
        help="Logging level",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ProcessorConfig:
    """Environment config with command-line overrides applied on top."""
    config = ProcessorConfig.from_env()
    overrides = {}
    if args.no_trim:
        overrides["trim_audio"] = False
    if args.offset is not None:
        overrides["trim_offset"] = args.offset
    if args.length is not None:
        overrides["trim_length"] = args.length
    if args.temp_dir:
        overrides["temp_dir"] = args.temp_dir
    if args.tag_writer:
        overrides["tag_writer"] = args.tag_writer
    return dataclasses.replace(config, **overrides) if overrides else config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_level:
        log.set_logging_level(args.log_level)

    try:
        config = config_from_args(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    failed = 0
    for path in args.files:
        try:
            data = process_song(path, config)
        except SongProcessingError as e:
            failed += 1
            log.error(f"{path}: {type(e).__name__}: {e}")
            continue
        print(f"{path}: {data.artist} - {data.title}")

    if failed:
        log.warning(f"{failed}/{len(args.files)} file(s) could not be tagged")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
