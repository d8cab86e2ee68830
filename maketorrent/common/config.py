import argparse
import os
import re

from maketorrent.common.errors import ConfigError
from maketorrent.torrent.files import check_source
from maketorrent.torrent.piece_size import validate_exponent

TRACKER_URL_RE = re.compile(r"^(udp|http|https)://", re.IGNORECASE)


def validate_tracker(url: str) -> str:
    if not url:
        raise ConfigError("Option -a requires tracker URL!")
    if not TRACKER_URL_RE.match(url):
        raise ConfigError(f"{url} is not a tracker URL!")
    return url


class TorrentConfig:
    __slots__ = (
        "source",
        "trackers",
        "comment",
        "created_by",
        "piece_size_exponent",
        "name",
        "output",
        "private",
    )

    def __init__(
        self,
        source: str,
        trackers: list[str],
        comment: str | None = None,
        created_by: str | None = None,
        piece_size_exponent: int | None = None,
        name: str | None = None,
        output: str | None = None,
        private: bool = False,
    ):
        self.source = source
        self.trackers = list(trackers)
        self.comment = comment
        self.created_by = created_by
        self.piece_size_exponent = piece_size_exponent
        self.name = name
        self.output = output
        self.private = private

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "TorrentConfig":
        return cls(
            source=str(args.target) if args.target is not None else "",
            trackers=args.announce or [],
            comment=args.comment,
            created_by=args.created_by,
            piece_size_exponent=args.piece_length,
            name=args.name,
            output=str(args.output) if args.output is not None else None,
            private=args.private,
        )

    def validate(self) -> "TorrentConfig":
        """Check every option. Nothing is read or written before this passes."""
        for url in self.trackers:
            validate_tracker(url)
        if not self.trackers:
            raise ConfigError("You must add at least one tracker!")
        if self.piece_size_exponent is not None:
            validate_exponent(self.piece_size_exponent)
        for option, value in (("-c", self.comment), ("-n", self.name), ("-o", self.output)):
            if value is not None and not value:
                raise ConfigError(f"Option {option} requires a value!")
        check_source(self.source)
        return self

    def resolved_name(self) -> str:
        if self.name:
            return self.name
        return os.path.basename(self.source.rstrip("/" + os.sep)) or self.source

    def resolved_output(self) -> str:
        return self.output or f"{self.resolved_name()}.torrent"
