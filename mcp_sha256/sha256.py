"""Incremental SHA-256 / SHA-224 in pure Python.

All arithmetic is on unsigned 32-bit words; every addition is masked.
"""
from __future__ import annotations

import struct
from typing import Union

from .encoding import Message, to_bytes

BLOCK_SIZE = 64
MASK = 0xFFFFFFFF

K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208, 0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

IV_256 = (0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A, 0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19)
IV_224 = (0xC1059ED8, 0x367CD507, 0x3070DD17, 0xF70E5939, 0xFFC00B31, 0x68581511, 0x64F98FA7, 0xBEFA4FA4)

_BLOCK = struct.Struct(">16I")
_STATE = struct.Struct(">8I")
_LENGTH = struct.Struct(">II")


class Scratch:
    """Working memory for one compression at a time: the 64-byte input block
    and the 64-word message schedule.

    An arena may be handed to several engines, but only if the caller never
    interleaves their updates: the partial block lives here too.
    """

    __slots__ = ("block", "words")

    def __init__(self) -> None:
        self.block = bytearray(BLOCK_SIZE)
        self.words = [0] * 64


SHARED_SCRATCH = Scratch()

ScratchArg = Union[bool, Scratch]

def _resolve_scratch(shared_scratch: ScratchArg) -> Scratch:
    if isinstance(shared_scratch, Scratch):
        return shared_scratch
    return SHARED_SCRATCH if shared_scratch else Scratch()


class Sha256:
    """Streaming SHA-256 (or SHA-224 when ``truncated``).

    ``update`` is chainable and becomes a no-op once the digest is finalized;
    ``hex``/``digest``/``array``/``to_buffer`` finalize implicitly and can be
    called any number of times.
    """

    block_size = BLOCK_SIZE

    def __init__(self, truncated: bool = False, shared_scratch: ScratchArg = False) -> None:
        self._truncated = bool(truncated)
        self._scratch = _resolve_scratch(shared_scratch)
        self._h = list(IV_224 if self._truncated else IV_256)
        self._start = 0     # fill offset inside the current block
        self._bytes = 0     # low byte counter, always < 2**32
        self._hbytes = 0    # high byte counter
        self._finalized = False

    @property
    def truncated(self) -> bool:
        return self._truncated

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def digest_size(self) -> int:
        return 28 if self._truncated else 32

    @property
    def name(self) -> str:
        return "sha224" if self._truncated else "sha256"

    def update(self, message: Message) -> "Sha256":
        if self._finalized:
            return self
        data = memoryview(to_bytes(message))
        length = len(data)
        block = self._scratch.block
        start = self._start
        pos = 0
        while pos < length:
            take = min(BLOCK_SIZE - start, length - pos)
            block[start:start + take] = data[pos:pos + take]
            start += take
            pos += take
            if start == BLOCK_SIZE:
                self._compress()
                start = 0
        self._start = start

        self._bytes += length
        if self._bytes > MASK:
            self._hbytes = (self._hbytes + (self._bytes >> 32)) & MASK
            self._bytes &= MASK
        return self

    def finalize(self) -> None:
        if self._finalized:
            return
        self._finalized = True

        block = self._scratch.block
        i = self._start
        block[i] = 0x80
        block[i + 1:BLOCK_SIZE] = bytes(BLOCK_SIZE - 1 - i)
        if i >= 56:
            # no room left for the length field
            self._compress()
            block[:] = bytes(BLOCK_SIZE)
        _LENGTH.pack_into(
            block,
            56,
            (self._hbytes << 3 | self._bytes >> 29) & MASK,
            (self._bytes << 3) & MASK,
        )
        self._compress()

    def _compress(self) -> None:
        w = self._scratch.words
        w[0:16] = _BLOCK.unpack(self._scratch.block)
        for t in range(16, 64):
            x = w[t - 15]
            s0 = ((x >> 7 | x << 25) ^ (x >> 18 | x << 14) ^ (x >> 3)) & MASK
            x = w[t - 2]
            s1 = ((x >> 17 | x << 15) ^ (x >> 19 | x << 13) ^ (x >> 10)) & MASK
            w[t] = (w[t - 16] + s0 + w[t - 7] + s1) & MASK

        a, b, c, d, e, f, g, h = self._h
        for t in range(64):
            s1 = ((e >> 6 | e << 26) ^ (e >> 11 | e << 21) ^ (e >> 25 | e << 7)) & MASK
            ch = (e & f) ^ (~e & g)
            t1 = (h + s1 + ch + K[t] + w[t]) & MASK
            s0 = ((a >> 2 | a << 30) ^ (a >> 13 | a << 19) ^ (a >> 22 | a << 10)) & MASK
            maj = (a & b) ^ (a & c) ^ (b & c)
            t2 = (s0 + maj) & MASK
            h = g
            g = f
            f = e
            e = (d + t1) & MASK
            d = c
            c = b
            b = a
            a = (t1 + t2) & MASK

        hs = self._h
        hs[0] = (hs[0] + a) & MASK
        hs[1] = (hs[1] + b) & MASK
        hs[2] = (hs[2] + c) & MASK
        hs[3] = (hs[3] + d) & MASK
        hs[4] = (hs[4] + e) & MASK
        hs[5] = (hs[5] + f) & MASK
        hs[6] = (hs[6] + g) & MASK
        hs[7] = (hs[7] + h) & MASK

    def digest(self) -> bytes:
        self.finalize()
        return _STATE.pack(*self._h)[:self.digest_size]

    def hex(self) -> str:
        return self.digest().hex()

    def array(self) -> list[int]:
        return list(self.digest())

    def to_buffer(self) -> bytearray:
        return bytearray(self.digest())

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        state = "finalized" if self._finalized else "open"
        return f"<{self.__class__.__name__} {self.name} {state}>"
