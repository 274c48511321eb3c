import pytest

from hangar.bitmask import (
    BITMASK_SIZE,
    WORD_MASK,
    change_bit,
    claim_bit_run,
    claim_first_bit,
    first_clear_bit,
    format_bits,
    next_power_of_two,
    round_up,
)


def test_round_up_exact_and_partial():
    assert round_up(128, 64) == 2
    assert round_up(129, 64) == round_up(128, 64) + 1


def test_round_up_rejects_zero_divisor():
    with pytest.raises(ValueError):
        round_up(10, 0)


def test_next_power_of_two_pool_size():
    assert next_power_of_two(1024 - 1, 2) == 1024
    assert next_power_of_two(2048 - 1, 2) == 2048


@pytest.mark.parametrize("size", [65, 100, 1000, 3000, 5000])
def test_next_power_of_two_is_smallest_cover(size):
    result = next_power_of_two(size - 1, 2)
    assert result >= size
    assert result // 2 < size
    assert result & (result - 1) == 0


def test_next_power_of_two_rejects_zero():
    with pytest.raises(ValueError):
        next_power_of_two(0, 2)


def test_first_clear_bit_full_word():
    assert first_clear_bit(WORD_MASK) is None


@pytest.mark.parametrize("k", [0, 1, 5, 31, 63])
def test_first_clear_bit_after_low_run(k):
    assert first_clear_bit((1 << k) - 1) == k


def test_claim_first_bit_sequential():
    words = [0, 0]
    claimed = [claim_first_bit(words, 2, True) for _ in range(2 * BITMASK_SIZE)]
    assert claimed == list(range(2 * BITMASK_SIZE))
    assert words == [WORD_MASK, WORD_MASK]
    assert claim_first_bit(words, 2, True) is None


def test_claim_first_bit_respects_count():
    words = [WORD_MASK, 0]
    assert claim_first_bit(words, 1, True) is None
    assert words[1] == 0


def test_claim_first_bit_reuses_freed_slot():
    words = [0]
    for _ in range(10):
        claim_first_bit(words, 1, True)
    change_bit(words, 4, False)
    assert claim_first_bit(words, 1, True) == 4


def test_change_bit_roundtrip():
    words = [0, 0]
    change_bit(words, BITMASK_SIZE + 3, True)
    assert words[0] == 0
    assert (words[1] >> 3) & 1 == 1
    change_bit(words, BITMASK_SIZE + 3, False)
    assert words == [0, 0]


def test_change_bit_negative_index():
    with pytest.raises(IndexError):
        change_bit([0], -1, True)


def test_claim_bit_run_across_boundary():
    words = [WORD_MASK >> 1, 0]
    start = claim_bit_run(words, 2, True, 3)
    assert start == BITMASK_SIZE - 1
    for index in range(start, start + 3):
        word, bit = divmod(index, BITMASK_SIZE)
        assert (words[word] >> bit) & 1 == 1
    assert words[0] == WORD_MASK


def test_claim_bit_run_skips_short_gaps():
    words = [0]
    change_bit(words, 2, True)
    start = claim_bit_run(words, 1, True, 4)
    assert start == 3
    assert format_bits(words[0], 7) == "1111100"[::-1][::-1].replace("1111100", "1111100")


def test_claim_bit_run_none_when_full():
    words = [WORD_MASK]
    assert claim_bit_run(words, 1, True, 2) is None
    assert words == [WORD_MASK]


def test_claim_bit_run_clearing_side():
    words = [WORD_MASK]
    start = claim_bit_run(words, 1, False, 5)
    assert start == 0
    assert first_clear_bit(words[0]) == 0
    assert words[0] == WORD_MASK & ~((1 << 5) - 1)


@pytest.mark.parametrize("value", [0, 1, WORD_MASK, 0x123456789ABCDEF0])
def test_format_bits_roundtrip(value):
    text = format_bits(value, BITMASK_SIZE)
    assert len(text) == BITMASK_SIZE
    assert int(text, 2) == value


def test_format_bits_msb_first():
    assert format_bits(1, 4) == "0001"