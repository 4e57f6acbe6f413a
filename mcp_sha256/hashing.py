from __future__ import annotations

from pathlib import Path

from .encoding import Message
from .hmac_sha256 import HmacSha256
from .sha256 import Sha256

def sha256_bytes(data: bytes) -> str:
    return Sha256().update(data).hex()

def sha256_text(text: str) -> str:
    return Sha256().update(text).hex()

def sha224_bytes(data: bytes) -> str:
    return Sha256(truncated=True).update(data).hex()

def sha224_text(text: str) -> str:
    return Sha256(truncated=True).update(text).hex()

def sha256_file_sized(path: Path, chunk_size: int = 1024 * 1024, truncated: bool = False) -> tuple[str, int]:
    """Digest a file and count the bytes that went into the digest."""
    h = Sha256(truncated=truncated)
    size = 0
    with path.open("rb") as f:
        while True:
            b = f.read(chunk_size)
            if not b:
                break
            h.update(b)
            size += len(b)
    return h.hex(), size

def sha256_file(path: Path, chunk_size: int = 1024 * 1024, truncated: bool = False) -> str:
    return sha256_file_sized(path, chunk_size=chunk_size, truncated=truncated)[0]

def hmac_sha256_bytes(key: Message, message: Message, truncated: bool = False) -> bytes:
    return HmacSha256(key, truncated=truncated).update(message).digest()

def hmac_sha256_hex(key: Message, message: Message, truncated: bool = False) -> str:
    return hmac_sha256_bytes(key, message, truncated=truncated).hex()
