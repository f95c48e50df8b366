"""
Core kernels for the fast Möbius (ANF) transform over GF(2).

Nothing in here validates its arguments: the public wrappers in
``pyanf/__init__.py`` check lengths, widths and dtypes first and then call
the matching kernel. The kernels double as the unchecked fast paths.
"""

import numpy as np

# uint64 word layout used by the packed-words kernel
_WORD_BITS = 64
_WORD_STAGES = 6


class AnfError(Exception):
    """Base class for all pyanf errors."""


class InvalidLengthError(AnfError, ValueError):
    """Truth table length is zero or not a power of two."""


class WidthTooSmallError(AnfError, ValueError):
    """Integer width cannot hold a truth table of 2^n entries."""


def is_power_of_2(value: int) -> bool:
    """Return True if ``value`` is 1, 2, 4, 8, ..."""
    return value > 0 and (value & (value - 1)) == 0


def log2(value: int) -> int:
    """Exact base-2 logarithm of a power of two."""
    if not is_power_of_2(value):
        raise ValueError(f"{value} is not a power of 2")
    return value.bit_length() - 1


def stage_mask(stage: int, nbits: int) -> int:
    """
    Mask over ``nbits`` bits selecting the low half of every block.

    Within each block of ``2^(stage+1)`` bits the low ``2^stage`` bits are set
    and the high ``2^stage`` bits are clear, starting from bit 0:

    >>> bin(stage_mask(0, 8)), bin(stage_mask(1, 8)), bin(stage_mask(2, 8))
    ('0b1010101', '0b110011', '0b1111')

    ``nbits`` must be a multiple of ``2^(stage+1)``. Under that condition
    ``2^nbits - 1`` factors as ``(2^h + 1) * mask`` with ``h = 2^stage``, so
    the division is exact.
    """
    run = 1 << stage
    return ((1 << nbits) - 1) // ((1 << run) + 1)


def anf_sequence(data, n: int) -> None:
    """Element-wise butterfly over any mutable sequence of length 2^n."""
    size = 1 << n
    for stage in range(n):
        half = 1 << stage
        block = half << 1
        for start in range(0, size, block):
            for j in range(start + half, start + block):
                data[j] ^= data[j - half]


def anf_ndarray(data: np.ndarray, n: int) -> None:
    """Vectorized butterfly over a C-contiguous 1-D array of length 2^n."""
    for stage in range(n):
        half = 1 << stage
        # (blocks, lower/upper half, offset) view; all blocks of a stage at once
        blocks = data.reshape(-1, 2, half)
        blocks[:, 1, :] ^= blocks[:, 0, :]


def anf_packed(x: int, n: int) -> int:
    """Word-parallel butterfly on the low 2^n bits of ``x``."""
    nbits = 1 << n
    for stage in range(n):
        x ^= (x & stage_mask(stage, nbits)) << (1 << stage)
    return x


_WORD_MASKS = [np.uint64(stage_mask(stage, _WORD_BITS)) for stage in range(_WORD_STAGES)]


def anf_words(words: np.ndarray, n: int) -> None:
    """
    Butterfly over a C-contiguous uint64 array holding 2^n packed bits.

    Stages below 6 stay inside each word and use the 64-bit masks. Later
    stages pair whole words, so they reduce to a block XOR on the word array.
    Words beyond the first ``ceil(2^n / 64)`` are never touched.
    """
    if n < _WORD_STAGES:
        words[0] = np.uint64(anf_packed(int(words[0]), n))
        return

    used = words[: (1 << n) // _WORD_BITS]
    for stage in range(_WORD_STAGES):
        used ^= (used & _WORD_MASKS[stage]) << np.uint64(1 << stage)

    for stage in range(_WORD_STAGES, n):
        span = 1 << (stage - _WORD_STAGES)
        blocks = used.reshape(-1, 2, span)
        blocks[:, 1, :] ^= blocks[:, 0, :]
