from __future__ import annotations

import random
from string import ascii_lowercase
from typing import Sequence

from randcheck.generators.base import Generator


def word_gen(size_gen: Generator[int], alphabet: Sequence[str] = ascii_lowercase) -> Generator[str]:
    """Words of `size_gen` characters picked from `alphabet`, repetitions allowed."""
    letters = tuple(alphabet)
    if not letters:
        raise ValueError("alphabet must not be empty")

    def _draw(rng: random.Random) -> str:
        size = size_gen.get(rng)
        if size < 0:
            raise ValueError(f"Word size must be >= 0, got {size}")
        return "".join(letters[rng.randrange(len(letters))] for _ in range(size))

    return Generator(_draw)


def bytes_gen(size_gen: Generator[int]) -> Generator[bytes]:
    def _draw(rng: random.Random) -> bytes:
        size = size_gen.get(rng)
        if size < 0:
            raise ValueError(f"Byte string size must be >= 0, got {size}")
        return rng.getrandbits(8 * size).to_bytes(size, "little") if size else b""

    return Generator(_draw)
