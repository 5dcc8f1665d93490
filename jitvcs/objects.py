"""Content-addressed, zlib-compressed object storage."""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from pathlib import Path

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK64 = (1 << 64) - 1


def compress(data: bytes) -> bytes:
    """Compress bytes with zlib at the default level."""
    return zlib.compress(data)


def decompress(data: bytes) -> bytes:
    """Decompress zlib data, raising ValueError when it is not valid."""
    try:
        return zlib.decompress(data)
    except zlib.error as exc:
        raise ValueError(f"zlib decompression failed: {exc}") from exc


def object_hash(data: bytes) -> str:
    """Return the 64-bit FNV-1a hash of ``data`` as a decimal string."""
    value = _FNV_OFFSET
    for byte in data:
        value = ((value ^ byte) * _FNV_PRIME) & _MASK64
    return str(value)


def encode_object(kind: str, content: bytes) -> bytes:
    """Build the stored form of an object: ``<kind> <size>\\0<content>``."""
    return f"{kind} {len(content)}".encode("ascii") + b"\0" + content


@dataclass(frozen=True)
class StoredObject:
    """An object read back from the store."""

    kind: str
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class ObjectStore:
    """Objects kept under ``root/<first two digits>/<remaining digits>``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, digest: str) -> Path:
        if len(digest) < 3:
            raise ValueError(f"object hash too short: {digest!r}")
        return self.root / digest[:2] / digest[2:]

    def write(self, kind: str, content: bytes) -> str:
        """Store an object and return its hash."""
        data = encode_object(kind, content)
        digest = object_hash(data)
        path = self.path_for(digest)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(compress(data))
        return digest

    def exists(self, digest: str) -> bool:
        try:
            return self.path_for(digest).is_file()
        except ValueError:
            return False

    def read(self, digest: str) -> StoredObject:
        """Load an object; KeyError if absent, ValueError if corrupt."""
        path = self.path_for(digest)
        if not path.is_file():
            raise KeyError(digest)
        data = decompress(path.read_bytes())
        header, sep, content = data.partition(b"\0")
        if not sep:
            raise ValueError(f"malformed object: {digest}")
        kind = header.split(b" ", 1)[0].decode("ascii", errors="replace")
        return StoredObject(kind, content)