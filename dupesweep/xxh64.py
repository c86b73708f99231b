"""Pure-Python XXH64 hash, one-shot and streaming."""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFFFFFFFFFF
_P1 = 11400714785074694791
_P2 = 14029467366897019727
_P3 = 1609587929392839161
_P4 = 9650029242287828579
_P5 = 2870177450012600261

_STRIPE = struct.Struct("<4Q")


def _rotl(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (64 - bits))) & _MASK


def _round(acc: int, lane: int) -> int:
    acc = (acc + lane * _P2) & _MASK
    acc = _rotl(acc, 31)
    return (acc * _P1) & _MASK


def _merge(acc: int, value: int) -> int:
    acc ^= _round(0, value)
    return (acc * _P1 + _P4) & _MASK


class XXH64:
    """Incremental XXH64 hasher."""

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed & _MASK
        self._v1 = (self._seed + _P1 + _P2) & _MASK
        self._v2 = (self._seed + _P2) & _MASK
        self._v3 = self._seed
        self._v4 = (self._seed - _P1) & _MASK
        self._total = 0
        self._pending = b""

    def update(self, data: bytes) -> None:
        """Feed more bytes into the hash."""
        data = bytes(data)
        self._total += len(data)
        buf = self._pending + data
        full = len(buf) - len(buf) % 32
        v1, v2, v3, v4 = self._v1, self._v2, self._v3, self._v4
        for offset in range(0, full, 32):
            a, b, c, d = _STRIPE.unpack_from(buf, offset)
            v1 = _round(v1, a)
            v2 = _round(v2, b)
            v3 = _round(v3, c)
            v4 = _round(v4, d)
        self._v1, self._v2, self._v3, self._v4 = v1, v2, v3, v4
        self._pending = buf[full:]

    def digest(self) -> int:
        """Return the 64-bit hash of everything fed so far."""
        if self._total >= 32:
            h = (
                _rotl(self._v1, 1)
                + _rotl(self._v2, 7)
                + _rotl(self._v3, 12)
                + _rotl(self._v4, 18)
            ) & _MASK
            for v in (self._v1, self._v2, self._v3, self._v4):
                h = _merge(h, v)
        else:
            h = (self._seed + _P5) & _MASK

        h = (h + self._total) & _MASK

        tail = self._pending
        pos = 0
        while pos + 8 <= len(tail):
            (lane,) = struct.unpack_from("<Q", tail, pos)
            h ^= _round(0, lane)
            h = (_rotl(h, 27) * _P1 + _P4) & _MASK
            pos += 8
        if pos + 4 <= len(tail):
            (lane,) = struct.unpack_from("<I", tail, pos)
            h ^= (lane * _P1) & _MASK
            h = (_rotl(h, 23) * _P2 + _P3) & _MASK
            pos += 4
        for byte in tail[pos:]:
            h ^= (byte * _P5) & _MASK
            h = (_rotl(h, 11) * _P1) & _MASK

        h ^= h >> 33
        h = (h * _P2) & _MASK
        h ^= h >> 29
        h = (h * _P3) & _MASK
        h ^= h >> 32
        return h

    def hexdigest(self) -> str:
        """Return the hash as lower-case hex without leading zeros."""
        return format(self.digest(), "x")


def xxh64(data: bytes, seed: int = 0) -> int:
    """Hash a byte string in one call."""
    hasher = XXH64(seed)
    hasher.update(data)
    return hasher.digest()