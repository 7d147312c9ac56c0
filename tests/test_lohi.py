import time

import pytest

from coemu.lohi import construct, current_ts, hi, lo


def test_current_ts_tracks_clock():
    before = int(time.time())
    ts = current_ts()
    after = int(time.time())
    assert before <= ts <= after


@pytest.mark.parametrize("bits", [16, 32, 64])
@pytest.mark.parametrize("fraction", [0, 1, 3, 7])
def test_split_and_join_round_trip(bits, fraction):
    value = ((1 << bits) - 1) * fraction // 7
    assert construct(hi(value, bits), lo(value, bits), bits) == value


@pytest.mark.parametrize("bits", [16, 32, 64])
def test_halves_fit_in_half_width(bits):
    value = (1 << bits) - 1
    assert lo(value, bits) < 1 << (bits // 2)
    assert hi(value, bits) < 1 << (bits // 2)
    assert lo(value, bits) == hi(value, bits)


def test_u16_pinned_values():
    assert construct(0x12, 0x34, 16) == 0x1234
    assert lo(0x1234, 16) == 0x34
    assert hi(0x1234, 16) == 0x12


def test_default_width_is_32_bits():
    value = construct(378, 430)
    assert lo(value) == 430
    assert hi(value) == 378
    assert value == construct(378, 430, 32)


def test_construct_masks_oversized_halves():
    assert construct(1 << 16, 1 << 16, 32) == 0


@pytest.mark.parametrize("bits", [0, 8, 24, 128])
def test_unsupported_width_raises(bits):
    with pytest.raises(ValueError):
        lo(1, bits)
    with pytest.raises(ValueError):
        hi(1, bits)
    with pytest.raises(ValueError):
        construct(1, 1, bits)