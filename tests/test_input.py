"""Decoding raw fuzzer bytes into address generators."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from token_fuzzer.addrgen import max_seed
from token_fuzzer.config import NUMBER_OF_ADDRESSES, U64_MAX
from token_fuzzer.input import Unstructured, address_generator_from_bytes
from token_fuzzer.types import AddressType


def test_empty_input_decodes_to_zero_seed() -> None:
    generator = address_generator_from_bytes(b"")
    assert generator.address_seed == 0
    assert generator.address_types == (AddressType.ACCOUNT,) * NUMBER_OF_ADDRESSES


def test_seed_wraps_into_bound() -> None:
    # 0xff * 8 == U64_MAX, reduced modulo (bound + 1)
    generator = address_generator_from_bytes(b"\xff" * 8)
    assert generator.address_seed == U64_MAX % (max_seed(NUMBER_OF_ADDRESSES) + 1)
    assert generator.address_seed <= max_seed(NUMBER_OF_ADDRESSES)


def test_type_selection() -> None:
    data = (1000).to_bytes(8, "big") + b"\x00" * 4 + b"\xff" * 4
    generator = address_generator_from_bytes(data, count=2)
    assert generator.address_seed == 1000
    assert generator.address_types == (AddressType.ACCOUNT, AddressType.CONTRACT)


def test_choose_index_reads_little_endian() -> None:
    assert Unstructured(b"\x00\x00\x00\x80").choose_index(2) == 1
    assert Unstructured(b"\x80\x00\x00\x00").choose_index(2) == 0


def test_short_selector_pads_high_bytes() -> None:
    # b"\xff" alone is the low byte of the selector
    generator = address_generator_from_bytes((5).to_bytes(8, "big") + b"\xff", count=1)
    assert generator.address_seed == 5
    assert generator.address_types == (AddressType.ACCOUNT,)


def test_int_in_range_single_value() -> None:
    u = Unstructured(b"\x01\x02")
    assert u.int_in_range(5, 5) == 5
    assert u.remaining() == 2


def test_int_in_range_consumes_minimal_bytes() -> None:
    u = Unstructured(b"\x07\x09")
    assert u.int_in_range(0, 255) == 7
    assert u.remaining() == 1
    assert u.int_in_range(10, 12) == 10 + 9 % 3


def test_invalid_ranges() -> None:
    u = Unstructured(b"")
    with pytest.raises(ValueError):
        u.int_in_range(2, 1)
    with pytest.raises(ValueError):
        u.choose_index(0)


@settings(max_examples=100, deadline=None)
@given(st.binary(max_size=64), st.integers(min_value=1, max_value=8))
def test_any_bytes_decode_within_bound(data: bytes, count: int) -> None:
    generator = address_generator_from_bytes(data, count)
    assert 0 <= generator.address_seed <= max_seed(count)
    assert len(generator.address_types) == count
    assert generator == address_generator_from_bytes(data, count)
