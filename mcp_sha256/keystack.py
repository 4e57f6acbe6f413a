from __future__ import annotations

import base64
import secrets
from typing import Sequence, Union

from .encoding import Message
from .hmac_sha256 import HmacSha256

Key = Union[str, bytes]

class KeyStackError(ValueError):
    pass

def encode_base64_safe(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")

def compare(a: Message, b: Message) -> bool:
    """Timing-safe equality for strings, bytes-likes or byte value lists.

    Both sides are MACed under a throwaway random key first, so the final
    comparison always runs over two 32-byte values regardless of input length.
    """
    key = secrets.token_bytes(32)
    ah = HmacSha256(key).update(a).digest()
    bh = HmacSha256(key).update(b).digest()
    return secrets.compare_digest(ah, bh)

def _sign(data: Message, key: Key) -> bytes:
    return HmacSha256(key).update(data).digest()

class KeyStack:
    """Sign with the newest key, verify against any of them.

    ``keys[0]`` signs; older keys stay in the list so data signed before a
    rotation keeps verifying until the key is dropped.
    """

    def __init__(self, keys: Sequence[Key]) -> None:
        keys = list(keys)
        if not keys:
            raise KeyStackError("keys must contain at least one value")
        self._keys = keys

    def __len__(self) -> int:
        return len(self._keys)

    def sign(self, data: Message) -> str:
        return encode_base64_safe(_sign(data, self._keys[0]))

    def verify(self, data: Message, digest: str) -> bool:
        return self.index_of(data, digest) > -1

    def index_of(self, data: Message, digest: str) -> int:
        for i, key in enumerate(self._keys):
            if compare(digest, encode_base64_safe(_sign(data, key))):
                return i
        return -1

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(length={len(self)})"
