#!/usr/bin/env python3
"""
maketorrent - build .torrent metainfo files
Main entry point for the application.
"""

import argparse
import sys
from pathlib import Path
from maketorrent.common.config import TorrentConfig
from maketorrent.common.errors import ConfigError, FileIOError
from maketorrent.common.logging import config_logging
from maketorrent.torrent.builder import create_torrent
import logging

logger = logging.getLogger(__name__)


def print_progress(done: int, total: int):
    print(f"\r{done} / {total}", end="", flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="maketorrent",
        description="Create a .torrent file from a file or a directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -a http://tracker.example.com/announce data/
  %(prog)s -a udp://t1/announce -a http://t2/announce -p -l 20 movie.mkv
        """,
    )

    parser.add_argument(
        "target",
        nargs="?",
        type=Path,
        help="File or directory to describe",
    )

    parser.add_argument(
        "-a", "--announce",
        action="append",
        metavar="URL",
        help="Add tracker URL (udp, http or https); may be given more than once",
    )

    parser.add_argument("-c", "--comment", help="Add comment")

    parser.add_argument("-C", "--created-by", help="Set the 'created by' field")

    parser.add_argument(
        "-l", "--piece-length",
        type=int,
        metavar="N",
        help="Set piece size to 2^N (16-26); default is from 18 to 24, based on data size",
    )

    parser.add_argument(
        "-n", "--name",
        help="Torrent name (default: target basename)",
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output file (default: <name>.torrent)",
    )

    parser.add_argument(
        "-p", "--private",
        action="store_true",
        help="Set private flag",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "--log-file",
        default="maketorrent.log.jsonl",
        help="Log file name under data/logs/ (default: maketorrent.log.jsonl)",
    )

    return parser


def run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    try:
        config = TorrentConfig.from_args(args).validate()
    except ConfigError as e:
        logger.info(f"Invalid options: {e}")
        parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Beware, symlinks are not supported yet and will be skipped!")

    try:
        result = create_torrent(config, progress=print_progress)
    except ConfigError as e:
        print()
        logger.info(f"Invalid options: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except FileIOError as e:
        print()
        # traceback goes to the log file, the console gets one line
        logger.debug(f"Torrent creation failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print()
    print(f"Torrent: {result.output_path}")
    print(f"Size: {result.total_size / (1024*1024):.2f} MB")
    print(f"Pieces: {result.piece_count} x {result.piece_size / 1024:.0f} KB")
    print(f"Info hash: {result.info_hash}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for maketorrent."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config_logging(args.log_file, verbose=args.verbose)

    return run(args, parser)


if __name__ == "__main__":
    sys.exit(main())
