import logging
import os
import stat

from maketorrent.common.errors import ConfigError, FileIOError
from maketorrent.torrent.metadata import FileEntry

logger = logging.getLogger(__name__)


def check_source(source: str):
    if not source:
        raise ConfigError("Source isn't selected!")
    if not os.path.lexists(source):
        raise ConfigError(f"Source isn't found: {source}")
    if not os.path.isdir(source) and not os.path.isfile(source):
        raise ConfigError(f"You can only select a file or a directory: {source}")


def is_single_file(source: str) -> bool:
    return os.path.isfile(source)


def _file_size(path: str) -> int:
    try:
        return os.stat(path).st_size
    except OSError as e:
        raise FileIOError(path, e, action="stat") from e


def collect_files(source: str) -> list[FileEntry]:
    """List the regular files under `source` in canonical order.

    Canonical order is byte-wise order of the full path; the hasher and the
    files table both rely on it. Symbolic links inside a directory source are
    not supported and are skipped.
    """
    check_source(source)

    if is_single_file(source):
        name = os.path.basename(os.path.normpath(source))
        return [FileEntry((name,), _file_size(source), source)]

    found: list[str] = []
    for root, dirnames, filenames in os.walk(source, followlinks=False):
        for dirname in dirnames:
            full = os.path.join(root, dirname)
            if os.path.islink(full):
                logger.warning(f"Skipping symlinked directory: {full}")
        for filename in filenames:
            full = os.path.join(root, filename)
            try:
                mode = os.lstat(full).st_mode
            except OSError as e:
                raise FileIOError(full, e, action="stat") from e
            if stat.S_ISLNK(mode):
                logger.warning(f"Skipping symlink: {full}")
            elif stat.S_ISREG(mode):
                found.append(full)
            else:
                logger.debug(f"Skipping special file: {full}")

    found.sort(key=os.fsencode)

    entries = []
    for full in found:
        relative = os.path.relpath(full, source)
        entries.append(FileEntry(tuple(relative.split(os.sep)), _file_size(full), full))
    logger.info(f"Collected {len(entries)} files from {source}")
    return entries


def total_size(entries: list[FileEntry]) -> int:
    return sum(entry.size for entry in entries)
