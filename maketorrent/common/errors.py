class MakeTorrentError(Exception):
    pass


class ConfigError(MakeTorrentError):
    """Raised when options are missing or invalid, before any file is read."""
    pass


class FileIOError(MakeTorrentError):
    """Raised when a source file can't be read or the output can't be written."""

    def __init__(
        self,
        path,
        cause: OSError | None = None,
        action: str = "read",
        reason: str | None = None,
    ):
        self.path = str(path)
        self.cause = cause
        self.action = action
        if reason is None and cause is not None:
            reason = cause.strerror or str(cause)
        detail = f": {reason}" if reason else ""
        super().__init__(f"Unable to {action} {self.path}{detail}")


class BencodeError(MakeTorrentError, TypeError):
    pass
