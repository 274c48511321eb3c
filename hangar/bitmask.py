"""Bit-level helpers for tracking occupied slots in 64-bit occupancy words."""

from __future__ import annotations

from collections.abc import MutableSequence

BITMASK_SIZE = 64
WORD_MASK = (1 << BITMASK_SIZE) - 1


def round_up(first: int, second: int) -> int:
    """Integer division of ``first`` by ``second``, rounded towards infinity."""
    if second <= 0:
        raise ValueError("divisor must be positive")
    return (first + second - 1) // second


def next_power_of_two(number: int, multiply: int) -> int:
    """Largest power of two not exceeding ``number * multiply``.

    Called as ``next_power_of_two(size - 1, 2)`` this yields the smallest
    power of two that is at least ``size``.
    """
    product = number * multiply
    if product <= 0:
        raise ValueError("number * multiply must be positive")
    return 1 << (product.bit_length() - 1)


def first_clear_bit(word: int) -> int | None:
    """Index of the lowest zero bit of a 64-bit word, or None if all are set."""
    word &= WORD_MASK
    if word == WORD_MASK:
        return None
    inverted = ~word & WORD_MASK
    return (inverted & -inverted).bit_length() - 1


def _apply(word: int, bit: int, side: bool) -> int:
    if side:
        return (word | (1 << bit)) & WORD_MASK
    return word & ~(1 << bit) & WORD_MASK


def claim_first_bit(words: MutableSequence[int], count: int, side: bool) -> int | None:
    """Find the first clear bit among the first ``count`` words and set or clear it.

    Returns the global bit index, or None when every bit is taken.
    """
    for word_index, word in enumerate(words[:count]):
        bit = first_clear_bit(word)
        if bit is None:
            continue
        words[word_index] = _apply(word, bit, bool(side))
        return word_index * BITMASK_SIZE + bit
    return None


def change_bit(words: MutableSequence[int], index: int, side: bool) -> None:
    """Set (``side`` true) or clear the bit at global ``index``."""
    if index < 0:
        raise IndexError("bit index must not be negative")
    word_index, bit = divmod(index, BITMASK_SIZE)
    words[word_index] = _apply(words[word_index], bit, bool(side))


def _bits(words: MutableSequence[int], count: int):
    for word_index, word in enumerate(words[:count]):
        for bit in range(BITMASK_SIZE):
            yield word_index * BITMASK_SIZE + bit, (word >> bit) & 1


def claim_bit_run(
    words: MutableSequence[int], count: int, side: bool, length: int
) -> int | None:
    """Find ``length`` consecutive bits differing from ``side`` and flip them.

    The run may cross word boundaries. Returns the index of the first bit of
    the run, or None when no such run exists within the first ``count`` words.
    """
    wanted = 1 if side else 0
    run = 0
    for position, value in _bits(words, count):
        if value == wanted:
            run = 0
            continue
        run += 1
        if run == length:
            start = position - (length - 1)
            for offset in range(length):
                change_bit(words, start + offset, bool(side))
            return start
    return None


def format_bits(value: int, bits: int) -> str:
    """Render the low ``bits`` bits of ``value``, most significant first."""
    return "".join(str((value >> i) & 1) for i in range(bits - 1, -1, -1))