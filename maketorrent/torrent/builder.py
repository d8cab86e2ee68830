import hashlib
import logging
import os
import tempfile
import time

from maketorrent.common.config import TorrentConfig
from maketorrent.common.errors import FileIOError
from maketorrent.torrent import bencode
from maketorrent.torrent.files import collect_files, is_single_file, total_size
from maketorrent.torrent.hasher import ProgressCallback, hash_pieces
from maketorrent.torrent.metadata import FileEntry, InfoDict, MetaInfo
from maketorrent.torrent.piece_size import select_piece_size

logger = logging.getLogger(__name__)

OUTPUT_MODE = 0o666


class TorrentResult:
    __slots__ = (
        "output_path",
        "info_hash",
        "piece_count",
        "piece_size",
        "total_size",
        "data",
    )

    def __init__(
        self,
        output_path: str,
        info_hash: str,
        piece_count: int,
        piece_size: int,
        total_size: int,
        data: bytes,
    ):
        self.output_path = output_path
        self.info_hash = info_hash
        self.piece_count = piece_count
        self.piece_size = piece_size
        self.total_size = total_size
        self.data = data


def build_metainfo(
    config: TorrentConfig,
    files: list[FileEntry],
    pieces: bytes,
    piece_size: int,
    single_file: bool,
    created: int | None = None,
) -> MetaInfo:
    if single_file:
        info = InfoDict(
            name=config.resolved_name(),
            piece_length=piece_size,
            pieces=pieces,
            length=total_size(files),
            private=config.private,
        )
    else:
        info = InfoDict(
            name=config.resolved_name(),
            piece_length=piece_size,
            pieces=pieces,
            files=files,
            private=config.private,
        )
    return MetaInfo(
        trackers=config.trackers,
        info=info,
        creation_date=int(time.time()) if created is None else created,
        comment=config.comment,
        created_by=config.created_by,
    )


def _output_mode() -> int:
    # os.umask only reads the mask by setting it, so put it straight back
    umask = os.umask(0)
    os.umask(umask)
    return OUTPUT_MODE & ~umask


def write_torrent(path: str, data: bytes):
    """Write `data` to `path` so that readers see either all of it or nothing."""
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(
            prefix=".", suffix=".torrent.tmp", dir=directory
        )
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_path, _output_mode())
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise FileIOError(path, e, action="write") from e
    logger.info(f"Wrote {len(data)} bytes to {path}")


def create_torrent(
    config: TorrentConfig,
    progress: ProgressCallback | None = None,
    created: int | None = None,
) -> TorrentResult:
    config.validate()

    files = collect_files(config.source)
    size = total_size(files)
    piece_size = select_piece_size(size, config.piece_size_exponent)
    logger.info(
        f"Creating torrent for {config.source}: {len(files)} files, "
        f"{size} bytes, piece length {piece_size}"
    )

    hashed = hash_pieces(files, piece_size, progress)
    metainfo = build_metainfo(
        config,
        files,
        hashed.pieces,
        piece_size,
        is_single_file(config.source),
        created,
    )

    info_data = bencode.encode(metainfo.info.to_bencode())
    info_hash = hashlib.sha1(info_data).hexdigest()
    data = bencode.encode(metainfo.to_bencode())

    output_path = config.resolved_output()
    write_torrent(output_path, data)

    return TorrentResult(
        output_path=output_path,
        info_hash=info_hash,
        piece_count=hashed.count,
        piece_size=piece_size,
        total_size=size,
        data=data,
    )
