from bisect import bisect_left
from collections import OrderedDict
from collections.abc import Iterator, Mapping
from typing import Any

import bencodepy

from maketorrent.common.errors import BencodeError


def _key_bytes(key: str | bytes) -> bytes:
    if isinstance(key, bytes):
        return key
    if isinstance(key, str):
        return key.encode("utf-8")
    raise BencodeError(f"Dictionary keys must be strings, not {type(key).__name__}")


class BencodeDict(Mapping):
    """Mapping that keeps its keys in raw byte order as they are inserted.

    Dictionaries in a descriptor must list their keys sorted, so every dict
    goes through this type before encoding and the order callers insert in
    never reaches the output.
    """

    __slots__ = ("_keys", "_values")

    def __init__(self, items: Mapping | None = None):
        self._keys: list[bytes] = []
        self._values: dict[bytes, Any] = {}
        if items is not None:
            for key, value in items.items():
                self.add(key, value)

    def add(self, key: str | bytes, value: Any):
        raw = _key_bytes(key)
        if raw in self._values:
            raise BencodeError(f"Duplicate dictionary key: {raw!r}")
        self._keys.insert(bisect_left(self._keys, raw), raw)
        self._values[raw] = value

    def __getitem__(self, key: str | bytes) -> Any:
        return self._values[_key_bytes(key)]

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"BencodeDict({dict(self.items())!r})"


def _prepare(value: Any) -> Any:
    """Turn `value` into plain types bencodepy writes, dict keys in byte order."""
    # bool is an int subclass but has no place in a descriptor
    if isinstance(value, bool):
        raise BencodeError("Cannot bencode a bool")
    if isinstance(value, int):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (list, tuple)):
        return [_prepare(item) for item in value]
    if isinstance(value, Mapping):
        if not isinstance(value, BencodeDict):
            value = BencodeDict(value)
        return OrderedDict((key, _prepare(item)) for key, item in value.items())
    raise BencodeError(f"Cannot bencode {type(value).__name__}")


def encode(value: Any) -> bytes:
    return bencodepy.encode(_prepare(value))
