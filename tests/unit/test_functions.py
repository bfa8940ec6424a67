"""Tests for the function address index."""

import pytest

from syscallsym.extraction.functions import FunctionAddressIndex, parse_address, parse_function_list


def test_preceding_selects_nearest_lower_entry():
    index = FunctionAddressIndex([0x100, 0x200, 0x300])
    assert index.preceding(0x250) == 0x200


def test_preceding_exact_and_bounds():
    index = FunctionAddressIndex([0x300, 0x100, 0x200])
    assert index.preceding(0x200) == 0x200
    assert index.preceding(0x99) is None
    assert index.preceding(0x10000) == 0x300


def test_empty_index():
    index = FunctionAddressIndex()
    assert len(index) == 0
    assert index.preceding(0x401000) is None


def test_contains_and_dedup():
    index = FunctionAddressIndex([0x100, 0x100, 0x200])
    assert len(index) == 2
    assert 0x100 in index
    assert 0x150 not in index
    assert list(index) == [0x100, 0x200]


@pytest.mark.parametrize("token,expected", [("0x401000", 0x401000), ("401000", 0x401000), ("0X1F", 0x1F)])
def test_parse_address(token, expected):
    assert parse_address(token) == expected


def test_parse_function_list_ignores_noise():
    text = """
    # discovered functions
    0x0000000000401000\t\t12
    401020 64
    not-an-address
    0x401000
    """
    index = parse_function_list(text)
    assert list(index) == [0x401000, 0x401020]
