from __future__ import annotations

from .encoding import Message, to_bytes
from .sha256 import BLOCK_SIZE, ScratchArg, Sha256

IPAD = 0x36
OPAD = 0x5C


class HmacSha256:
    """HMAC over :class:`Sha256` (RFC 2104).

    Same surface as the plain engine. The inner pad is absorbed at
    construction; the outer pass runs once, on the first ``finalize``.
    """

    block_size = BLOCK_SIZE

    def __init__(self, secret_key: Message, truncated: bool = False, shared_scratch: ScratchArg = False) -> None:
        key = to_bytes(secret_key)
        if len(key) > BLOCK_SIZE:
            key = Sha256(truncated, shared_scratch).update(key).digest()
        key = key.ljust(BLOCK_SIZE, b"\x00")

        self._ipad = bytes(b ^ IPAD for b in key)
        self._opad = bytes(b ^ OPAD for b in key)
        self._truncated = bool(truncated)
        self._shared_scratch = shared_scratch
        self._inner = True
        self._hash = Sha256(truncated, shared_scratch)
        self._hash.update(self._ipad)

    @property
    def truncated(self) -> bool:
        return self._truncated

    @property
    def finalized(self) -> bool:
        return not self._inner

    @property
    def digest_size(self) -> int:
        return self._hash.digest_size

    @property
    def name(self) -> str:
        return f"hmac-{self._hash.name}"

    def update(self, message: Message) -> "HmacSha256":
        self._hash.update(message)
        return self

    def finalize(self) -> None:
        if not self._inner:
            return
        self._inner = False

        inner_digest = self._hash.digest()
        self._hash = Sha256(self._truncated, self._shared_scratch)
        self._hash.update(self._opad).update(inner_digest)
        self._hash.finalize()

    def digest(self) -> bytes:
        self.finalize()
        return self._hash.digest()

    def hex(self) -> str:
        self.finalize()
        return self._hash.hex()

    def array(self) -> list[int]:
        return list(self.digest())

    def to_buffer(self) -> bytearray:
        return bytearray(self.digest())

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        state = "finalized" if not self._inner else "open"
        return f"<{self.__class__.__name__} {self.name} {state}>"
