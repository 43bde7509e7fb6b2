"""Tests for input normalization."""

import pytest

from validador_cnpj.validation.normalizer import normalize


@pytest.mark.parametrize("raw, expected", [
    ("11.222.333/0001-81", "11222333000181"),
    (" 11.222.333/0001-81 ", "11222333000181"),
    ("11 222 333 0001 81", "11222333000181"),
    ("11222333000181", "11222333000181"),
    ("abc", ""),
    ("", ""),
    (None, ""),
])
def test_normalize_keeps_only_digits(raw, expected):
    assert normalize(raw) == expected


def test_normalize_drops_non_ascii_digits():
    # Arabic-Indic and full-width digits are not CNPJ digits
    assert normalize("١٢3４5") == "35"


@pytest.mark.parametrize("raw", [
    "11.222.333/0001-81",
    "  x1y2z3  ",
    "",
    "٣٣-44",
])
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once
