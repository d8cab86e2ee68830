import hashlib
import logging
import math
from collections.abc import Callable

from maketorrent.common.errors import FileIOError
from maketorrent.torrent.metadata import FileEntry

logger = logging.getLogger(__name__)

DIGEST_LENGTH = 20

ProgressCallback = Callable[[int, int], None]


class PieceBuffer:
    """Bytes collected toward the current piece, carried across file boundaries."""

    __slots__ = ("capacity", "_chunks", "_size")

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"Buffer capacity must be positive: {capacity}")
        self.capacity = capacity
        self._chunks: list[bytes] = []
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def remaining_capacity(self) -> int:
        return self.capacity - self._size

    def is_full(self) -> bool:
        return self._size == self.capacity

    def fill(self, data: bytes) -> bytes:
        """Append as much of `data` as fits and return the rest."""
        take = min(len(data), self.remaining_capacity())
        if take:
            self._chunks.append(data[:take])
            self._size += take
        return data[take:]

    def drain(self) -> bytes:
        data = b"".join(self._chunks)
        self._chunks = []
        self._size = 0
        return data


class HashResult:
    __slots__ = ("pieces", "count")

    def __init__(self, pieces: bytes, count: int):
        self.pieces = pieces
        self.count = count

    def digests(self) -> list[bytes]:
        return [
            self.pieces[i : i + DIGEST_LENGTH]
            for i in range(0, len(self.pieces), DIGEST_LENGTH)
        ]


def expected_piece_count(total_size: int, piece_size: int) -> int:
    return math.ceil(total_size / piece_size)


def hash_pieces(
    files: list[FileEntry],
    piece_size: int,
    progress: ProgressCallback | None = None,
) -> HashResult:
    """SHA-1 every piece of the files' concatenated content, in list order."""
    total = expected_piece_count(sum(entry.size for entry in files), piece_size)
    buffer = PieceBuffer(piece_size)
    digests: list[bytes] = []

    def emit(piece: bytes):
        digests.append(hashlib.sha1(piece).digest())
        if progress is not None:
            progress(len(digests), total)

    for entry in files:
        logger.debug(f"Hashing {entry.source} ({entry.size} bytes)")
        # read exactly the size recorded at enumeration, the files table uses it
        left = entry.size
        try:
            with open(entry.source, "rb") as f:
                chunk = f.read(min(buffer.remaining_capacity(), left))
                left -= len(chunk)
                buffer.fill(chunk)
                if buffer.is_full():
                    emit(buffer.drain())
                    while True:
                        chunk = f.read(min(piece_size, left))
                        left -= len(chunk)
                        if len(chunk) < piece_size:
                            # short tail carries over into the next file
                            buffer.fill(chunk)
                            break
                        emit(chunk)
                extra = f.read(1)
        except OSError as e:
            raise FileIOError(entry.source, e) from e
        if left or extra:
            raise FileIOError(
                entry.source,
                reason=f"size changed while hashing (expected {entry.size} bytes)",
            )

    if len(buffer):
        emit(buffer.drain())

    logger.info(f"Hashed {len(digests)} pieces of {piece_size} bytes")
    return HashResult(b"".join(digests), len(digests))
