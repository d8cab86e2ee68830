from maketorrent.common.errors import ConfigError

PIECE_EXPONENT_MIN = 16  # 64 KiB
PIECE_EXPONENT_MAX = 26  # 64 MiB
AUTO_EXPONENT_START = 18  # 256 KiB
AUTO_EXPONENT_CAP = 24  # 16 MiB
TARGET_PIECES = 2048


def validate_exponent(exponent) -> int:
    if isinstance(exponent, bool) or not isinstance(exponent, int):
        raise ConfigError(f"Piece size exponent must be an integer, not {exponent!r}")
    if not PIECE_EXPONENT_MIN <= exponent <= PIECE_EXPONENT_MAX:
        raise ConfigError(
            f"Piece size must be between {PIECE_EXPONENT_MIN} and {PIECE_EXPONENT_MAX} "
            "(64KB and 64MB respectively)!"
        )
    return exponent


def select_piece_size(total_size: int, exponent: int | None = None) -> int:
    """Return the piece length in bytes for `total_size` bytes of content.

    An explicit exponent wins; otherwise the exponent grows from 18 until the
    content fits in about 2048 pieces, never past 24.
    """
    if exponent is not None:
        return 2 ** validate_exponent(exponent)
    if total_size < 0:
        raise ValueError(f"Total size can't be negative: {total_size}")

    power = AUTO_EXPONENT_START
    while power < AUTO_EXPONENT_CAP and 2**power < total_size / TARGET_PIECES:
        power += 1
    return 2**power
