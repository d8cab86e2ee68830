from maketorrent.torrent.bencode import BencodeDict


class FileEntry:
    __slots__ = ("path", "size", "source")

    def __init__(self, path: tuple[str, ...], size: int, source: str):
        self.path = path  # components relative to the source root
        self.size = size
        self.source = source  # where the bytes are read from

    def __repr__(self):
        return f"FileEntry(path={self.path!r}, size={self.size})"

    def to_bencode(self) -> BencodeDict:
        entry = BencodeDict()
        entry.add("length", self.size)
        entry.add("path", list(self.path))
        return entry


class InfoDict:
    __slots__ = (
        "name",
        "piece_length",
        "pieces",
        "files",
        "length",
        "private",
    )

    def __init__(
        self,
        name: str,
        piece_length: int,
        pieces: bytes,
        files: list[FileEntry] | None = None,
        length: int | None = None,
        private: bool = False,
    ):
        if (files is None) == (length is None):
            raise ValueError("InfoDict needs exactly one of files or length")
        self.name = name
        self.piece_length = piece_length
        self.pieces = pieces
        self.files = files
        self.length = length
        self.private = private

    @property
    def single_file(self) -> bool:
        return self.files is None

    def to_bencode(self) -> BencodeDict:
        info = BencodeDict()
        if self.single_file:
            info.add("length", self.length)
        else:
            info.add("files", [entry.to_bencode() for entry in self.files])
        info.add("name", self.name)
        info.add("piece length", self.piece_length)
        info.add("pieces", self.pieces)
        if self.private:
            info.add("private", 1)
        return info


class MetaInfo:
    __slots__ = (
        "trackers",
        "comment",
        "created_by",
        "creation_date",
        "info",
    )

    def __init__(
        self,
        trackers: list[str],
        info: InfoDict,
        creation_date: int,
        comment: str | None = None,
        created_by: str | None = None,
    ):
        self.trackers = trackers
        self.info = info
        self.creation_date = creation_date
        self.comment = comment
        self.created_by = created_by

    @property
    def announce(self) -> str:
        return self.trackers[0]

    def to_bencode(self) -> BencodeDict:
        root = BencodeDict()
        root.add("announce", self.announce)
        if len(self.trackers) > 1:
            root.add("announce-list", [[tracker] for tracker in self.trackers])
        if self.comment:
            root.add("comment", self.comment)
        if self.created_by:
            root.add("created by", self.created_by)
        root.add("creation date", self.creation_date)
        root.add("info", self.info.to_bencode())
        return root
