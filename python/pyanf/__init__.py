"""
pyanf - Fast Algebraic Normal Form Transform for Boolean Functions

Converts boolean function truth tables into their Algebraic Normal Form
(ANF) using the fast Möbius transform over GF(2). The transform runs either
element-wise on arrays (NumPy-vectorized or pure Python) or word-parallel on
bit-packed integers, with one masked shift-XOR per stage.

Basic Usage:
    >>> import numpy as np
    >>> import pyanf
    >>> table = np.array([1, 1, 0, 0], dtype=bool)
    >>> pyanf.transform_array(table)  # In-place transform
    >>> print(table.astype(int))
    [1 0 1 0]
    >>> pyanf.transform_packed(0b0011, n=2)
    5

The transform is its own inverse: applying it to ANF coefficients gives the
truth table back.

License: GPL-3.0-or-later
"""

from ._version import __version__
from . import _core
from ._core import (
    AnfError,
    InvalidLengthError,
    WidthTooSmallError,
    is_power_of_2,
    log2,
    stage_mask,
)

import enum
import numbers
import os
import warnings
from dataclasses import dataclass
from typing import Optional, Union, Any

import numpy as np

# Global flag for slow-path warning (shown only once)
_slow_path_warning_shown = False

# Tables at least this long trigger the pure-Python loop notice
_SLOW_PATH_LENGTH = 1 << 16

__all__ = [
    '__version__',
    'AnfError',
    'InvalidLengthError',
    'WidthTooSmallError',
    'Backend',
    'Config',
    'default_config',
    'transform_array',
    'compute_anf',
    'anf_to_truth_table',
    'transform_packed',
    'transform_packed_unchecked',
    'transform_rule',
    'transform_words',
    'pack_bits',
    'unpack_bits',
    'pack_words',
    'unpack_words',
    'is_power_of_2',
    'log2',
    'stage_mask',
    'version',
]


class Backend(enum.Enum):
    """Array transform backends."""

    AUTO = 'auto'
    PYTHON = 'python'
    NUMPY = 'numpy'


@dataclass(frozen=True)
class Config:
    """
    Process-wide defaults for the array transform.

    Attributes
    ----------
    backend : Backend
        Backend used when ``transform_array`` is called without one.
    silence_slow_path_warning : bool
        Suppress the one-time notice about the pure-Python element loop.
    """

    backend: Backend = Backend.AUTO
    silence_slow_path_warning: bool = False


def _parse_backend(backend: Union[Backend, str]) -> Backend:
    if isinstance(backend, Backend):
        return backend
    if isinstance(backend, str):
        name = backend.strip().lower()
        try:
            return Backend(name)
        except ValueError:
            raise ValueError(
                f"Unknown backend string '{backend}'. Expected one of: auto,python,numpy"
            ) from None
    raise TypeError(f"backend must be a Backend or str, not {type(backend).__name__}")


def default_config() -> Config:
    """
    Build the default configuration from the environment.

    Environment variables
    ---------------------
    PYANF_BACKEND
        One of ``auto``, ``python``, ``numpy``. Defaults to ``auto``.
    PYANF_SILENCE_SLOW_PATH_WARNING
        Set to ``1`` to suppress the pure-Python loop notice.
    """
    backend = _parse_backend(os.environ.get('PYANF_BACKEND', 'auto'))
    silence = os.environ.get('PYANF_SILENCE_SLOW_PATH_WARNING') == '1'
    return Config(backend=backend, silence_slow_path_warning=silence)


def version() -> str:
    """Return the pyanf version string."""
    return __version__


def _warn_slow_path(length: int) -> None:
    """
    Show one-time warning about the pure-Python element loop on large tables.
    Can be suppressed with PYANF_SILENCE_SLOW_PATH_WARNING=1 environment variable.
    """
    global _slow_path_warning_shown

    if _slow_path_warning_shown:
        return

    # Check if warning should be suppressed
    if os.environ.get('PYANF_SILENCE_SLOW_PATH_WARNING') == '1':
        _slow_path_warning_shown = True
        return

    warnings.warn(
        f"Transforming {length} entries with the pure-Python element loop. "
        "Pass a NumPy array or use backend='numpy' for the vectorized path. "
        "To suppress this warning: set PYANF_SILENCE_SLOW_PATH_WARNING=1",
        UserWarning,
        stacklevel=3
    )

    _slow_path_warning_shown = True


def _table_stages(length: int) -> int:
    """Number of variables n for a table of ``length`` entries."""
    if not is_power_of_2(length):
        raise InvalidLengthError(
            f"Truth table length must be a power of 2, got {length}"
        )
    return log2(length)


def _check_table_dtype(dtype: np.dtype) -> None:
    if dtype != np.bool_ and not np.issubdtype(dtype, np.integer):
        raise TypeError(
            f"Unsupported dtype: {dtype}. "
            "Supported types: bool, integer"
        )


def _check_sequence_items(data: Any) -> None:
    for item in data:
        if not isinstance(item, (numbers.Integral, np.bool_)):
            raise TypeError(
                f"Unsupported dtype: {type(item).__name__}. "
                "Supported types: bool, integer"
            )


def _check_variables(n: int) -> None:
    if n < 0:
        raise ValueError(f"Number of variables must be non-negative, got {n}")


def transform_array(
    data: Any,
    backend: Optional[Union[Backend, str]] = None
) -> None:
    """
    In-place ANF transform of a truth table.

    Parameters
    ----------
    data : np.ndarray or mutable sequence
        Truth table of length 2^n. Entry ``i`` is the function value at the
        assignment whose bit ``k`` is variable ``x_k``. NumPy arrays must be
        1-D with bool or integer dtype; lists, bytearrays and other mutable
        sequences of bools or 0/1 integers are also accepted.
        Modified in-place to hold the ANF coefficients.
    backend : Backend or str, optional
        'auto', 'python' or 'numpy'. If None, taken from
        ``default_config()`` (``PYANF_BACKEND``, default 'auto'). AUTO picks
        NUMPY for arrays and PYTHON for everything else.

    Raises
    ------
    InvalidLengthError
        If the length is zero or not a power of 2. Raised before any
        element is modified.
    ValueError
        If a NumPy array is not 1-D, or the backend string is unknown.
    TypeError
        If the element dtype is not bool or integer.

    Examples
    --------
    >>> table = [True, True, False, False]   # f = NOT x1
    >>> transform_array(table)
    >>> table                                # 1 XOR x1
    [True, False, True, False]

    Notes
    -----
    The PYTHON backend runs the literal O(n 2^n) element loop. The NUMPY
    backend performs one vectorized XOR per stage over all blocks at once.
    Non-contiguous arrays and non-array sequences are transformed through a
    temporary copy that is written back, so the caller's object is still the
    one that ends up modified.
    """
    if backend is None:
        backend = default_config().backend
    else:
        backend = _parse_backend(backend)

    is_array = isinstance(data, np.ndarray)
    if is_array and data.ndim != 1:
        raise ValueError("Input must be 1-dimensional")

    n = _table_stages(len(data))

    if backend == Backend.AUTO:
        backend = Backend.NUMPY if is_array else Backend.PYTHON

    if is_array:
        _check_table_dtype(data.dtype)

    if backend == Backend.PYTHON:
        if not is_array:
            _check_sequence_items(data)
        if len(data) >= _SLOW_PATH_LENGTH:
            _warn_slow_path(len(data))
        _core.anf_sequence(data, n)
    elif is_array:
        if data.flags.c_contiguous:
            _core.anf_ndarray(data, n)
        else:
            work = np.ascontiguousarray(data)
            _core.anf_ndarray(work, n)
            data[...] = work
    else:
        work = np.array(list(data))
        _check_table_dtype(work.dtype)
        _core.anf_ndarray(work, n)
        data[:] = work.tolist()


def compute_anf(truth_table: Any) -> np.ndarray:
    """
    Out-of-place ANF transform.

    Parameters
    ----------
    truth_table : array_like
        1-D truth table of length 2^n (bools or 0/1 integers).
        Not modified.

    Returns
    -------
    np.ndarray
        ANF coefficients as a new bool array of the same length.

    Examples
    --------
    >>> compute_anf([0, 1, 1, 0]).astype(int)   # x0 XOR x1
    array([0, 1, 1, 0])
    >>> compute_anf([0, 0, 0, 1]).astype(int)   # x0 AND x1
    array([0, 0, 0, 1])
    """
    result = np.array(truth_table, dtype=bool)
    if result.ndim != 1:
        raise ValueError("Input must be 1-dimensional")
    _core.anf_ndarray(result, _table_stages(result.size))
    return result


def anf_to_truth_table(coefficients: Any) -> np.ndarray:
    """
    Recover the truth table from ANF coefficients.

    The Möbius transform over GF(2) is an involution, so this is the very
    same operation as :func:`compute_anf`; the separate name exists so code
    converting in the reverse direction reads correctly.

    Parameters
    ----------
    coefficients : array_like
        1-D ANF coefficients of length 2^n, indexed by monomial.

    Returns
    -------
    np.ndarray
        Truth table as a new bool array.
    """
    return compute_anf(coefficients)


def _packed_operand(x: Any, width: Optional[int]):
    """Split a packed table into (python int, bit width or None)."""
    if isinstance(x, np.integer):
        if not isinstance(x, np.unsignedinteger):
            raise TypeError(
                f"Unsupported dtype: {x.dtype}. "
                "Packed truth tables must be unsigned"
            )
        bits = x.dtype.itemsize * 8
        if width is not None and width != bits:
            raise ValueError(
                f"width={width} does not match the {bits}-bit dtype {x.dtype}"
            )
        return int(x), bits

    if isinstance(x, bool) or not isinstance(x, int):
        raise TypeError(
            f"Packed truth table must be an int or NumPy unsigned scalar, "
            f"not {type(x).__name__}"
        )
    if width is not None and width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    return x, width


def transform_packed(
    x: Any,
    n: int,
    width: Optional[int] = None
) -> Any:
    """
    ANF transform of a bit-packed truth table (checked entry point).

    Parameters
    ----------
    x : int or np.unsignedinteger
        Packed truth table: bit ``i`` holds table entry ``i``. For NumPy
        unsigned scalars (uint8 ... uint64) the width W is the dtype size.
        For Python ints W is ``width``, or unbounded when ``width`` is None.
        The unbounded form builds 2^n-bit intermediate masks, so memory grows
        as 2^n: n=40 needs 128 GiB per mask.
    n : int
        Number of variables; the table occupies the low 2^n bits.
    width : int, optional
        Bit width W of a Python int operand.

    Returns
    -------
    int or np.unsignedinteger
        Transformed value, same type as ``x``. Bits at positions >= 2^n
        are copied from ``x`` unchanged.

    Raises
    ------
    WidthTooSmallError
        If 2^n > W.
    ValueError
        If ``x`` is negative, does not fit in W bits, or ``n`` < 0.
    TypeError
        If ``x`` is not an int or unsigned NumPy scalar.

    Examples
    --------
    >>> transform_packed(0b0011, n=2)          # NOT x1  ->  1 XOR x1
    5
    >>> int(transform_packed(np.uint8(240), n=3))   # x2
    16
    """
    value, bits = _packed_operand(x, width)
    _check_variables(n)
    if value < 0:
        raise ValueError("Packed truth table must be non-negative")

    if bits is not None:
        if (1 << n) > bits:
            raise WidthTooSmallError(
                f"A {bits}-bit integer cannot hold a truth table of "
                f"2^{n} = {1 << n} entries"
            )
        if value.bit_length() > bits:
            raise ValueError(f"Value {value} does not fit in {bits} bits")

    result = _core.anf_packed(value, n)
    if isinstance(x, np.unsignedinteger):
        return x.dtype.type(result)
    return result


def transform_packed_unchecked(x: int, n: int) -> int:
    """
    ANF transform of a packed truth table without any validation.

    Fast path for callers that already checked ``x`` and ``n``. Bits at
    positions >= 2^n are still preserved. Always returns a Python int.

    There is no width limit: each stage builds a 2^n-bit mask, so a large
    ``n`` (say 40) exhausts memory instead of raising.
    """
    return _core.anf_packed(int(x), n)


def transform_rule(rule_number: int, n: int) -> int:
    """
    ANF of a rule number (e.g. an elementary cellular automaton rule).

    Unlike :func:`transform_packed` the whole value must be a table:
    ``rule_number`` has to lie in ``[0, 2^(2^n))``.

    Parameters
    ----------
    rule_number : int
        Truth table of an n-variable function, bit ``i`` = output for input ``i``.
    n : int
        Number of variables.

    Returns
    -------
    int
        ANF rule number: bit ``i`` set iff monomial ``i`` is present.

    Examples
    --------
    >>> transform_rule(30, 3)    # x0 ^ x1 ^ x0.x1 ^ x2
    30
    >>> transform_rule(3, 2)
    5
    """
    _check_variables(n)
    if isinstance(rule_number, bool) or not isinstance(rule_number, (int, np.integer)):
        raise TypeError(f"rule_number must be an int, not {type(rule_number).__name__}")
    rule_number = int(rule_number)
    if rule_number < 0 or rule_number.bit_length() > (1 << n):
        raise ValueError(
            f"Rule number must lie in [0, 2^(2^n)) for n={n}, got {rule_number}"
        )
    return _core.anf_packed(rule_number, n)


def _check_words(words: Any, n: int) -> None:
    if not isinstance(words, np.ndarray):
        raise TypeError("Input must be a NumPy array")

    if words.dtype != np.uint64:
        raise TypeError("Packed words must have dtype uint64")

    if words.ndim != 1:
        raise ValueError("Packed words must be 1-dimensional")

    _check_variables(n)
    capacity = _core._WORD_BITS * words.size
    if (1 << n) > capacity:
        raise WidthTooSmallError(
            f"{words.size} uint64 words ({capacity} bits) cannot hold a truth "
            f"table of 2^{n} = {1 << n} entries"
        )


def transform_words(words: np.ndarray, n: int) -> None:
    """
    In-place ANF transform of a truth table packed into uint64 words.

    Parameters
    ----------
    words : np.ndarray
        1-D array of uint64. Bit ``i`` of word ``j`` is table entry
        ``64*j + i``. Modified in-place.
    n : int
        Number of variables. Requires 2^n <= 64 * len(words).

    Raises
    ------
    TypeError
        If ``words`` is not a uint64 NumPy array.
    ValueError
        If ``words`` is not 1-D or ``n`` < 0.
    WidthTooSmallError
        If the words cannot hold 2^n bits.

    Examples
    --------
    >>> words = pack_words([1, 1, 0, 0] * 32)      # n = 7, two words
    >>> transform_words(words, n=7)
    >>> [hex(int(w)) for w in words]
    ['0x5', '0x0']

    Notes
    -----
    Stages 0-5 run as masked shift-XORs inside each word; stages 6 and up
    pair whole words and run as a block XOR over the array. Words and bits
    beyond the first 2^n bits are left untouched.
    """
    _check_words(words, n)

    if words.flags.c_contiguous:
        _core.anf_words(words, n)
    else:
        work = np.ascontiguousarray(words)
        _core.anf_words(work, n)
        words[...] = work


def _table_bits(truth_table: Any) -> np.ndarray:
    bits = np.asarray(truth_table, dtype=bool)
    if bits.ndim != 1:
        raise ValueError("Input must be 1-dimensional")
    _table_stages(bits.size)
    return bits


def pack_bits(truth_table: Any) -> int:
    """
    Pack a truth table into a Python int, entry ``i`` at bit ``i``.

    >>> pack_bits([1, 1, 0, 0])
    3
    """
    bits = _table_bits(truth_table)
    raw = np.packbits(bits, bitorder='little')
    return int.from_bytes(raw.tobytes(), 'little')


def unpack_bits(x: Any, n: int) -> np.ndarray:
    """
    Unpack the low 2^n bits of ``x`` into a bool array.

    >>> unpack_bits(5, 2).astype(int)
    array([1, 0, 1, 0])
    """
    _check_variables(n)
    value = int(x)
    if value < 0:
        raise ValueError("Packed truth table must be non-negative")
    size = 1 << n
    raw = (value & ((1 << size) - 1)).to_bytes((size + 7) // 8, 'little')
    bits = np.unpackbits(np.frombuffer(raw, dtype=np.uint8), bitorder='little')
    return bits[:size].astype(bool)


def pack_words(truth_table: Any) -> np.ndarray:
    """
    Pack a truth table into ceil(len/64) uint64 words.

    Bit ``i`` of word ``j`` holds entry ``64*j + i``; unused high bits of
    the last word are zero.
    """
    bits = _table_bits(truth_table)
    n_words = (bits.size + 63) // 64
    padded = np.zeros(n_words * 64, dtype=bool)
    padded[:bits.size] = bits
    raw = np.packbits(padded, bitorder='little')
    return raw.view('<u8').astype(np.uint64)


def unpack_words(words: np.ndarray, n: int) -> np.ndarray:
    """Unpack the first 2^n bits of a uint64 word array into a bool array."""
    _check_words(words, n)
    raw = words.astype('<u8').view(np.uint8)
    return np.unpackbits(raw, bitorder='little')[:1 << n].astype(bool)
