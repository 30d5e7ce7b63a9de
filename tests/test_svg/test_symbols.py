"""Tests for symbol extraction and symbol library building."""

import pytest

from sceneforge.errors import ResourceError
from sceneforge.svg.symbols import build_library, extract_symbol, make_flip_symbol, svg_to_symbol
from tests.conftest import SIMPLE_SVG, SYMBOL_LIBRARY_SVG


def test_extract_symbol_double_quoted():
    symbol = extract_symbol(SYMBOL_LIBRARY_SVG, "motif_card")
    assert symbol == '<symbol id="motif_card" viewBox="0 0 10 10"><rect width="10" height="10"/></symbol>'


def test_extract_symbol_id_not_first():
    symbol = extract_symbol(SYMBOL_LIBRARY_SVG, "motif_lock")
    assert symbol.startswith('<symbol viewBox="0 0 20 20"')
    assert symbol.endswith("</symbol>")


def test_extract_symbol_missing():
    assert extract_symbol(SYMBOL_LIBRARY_SVG, "motif_nope") is None
    assert extract_symbol("", "motif_card") is None
    assert extract_symbol('<symbol id="motif_open">', "motif_open") is None


def test_svg_to_symbol():
    symbol, view_box = svg_to_symbol(SIMPLE_SVG, "motif_simple")
    assert view_box == "0 0 100 50"
    assert symbol == (
        '<symbol id="motif_simple" viewBox="0 0 100 50">'
        '<rect x="10" y="10" width="80" height="30" fill="#4F8CFF"/></symbol>'
    )


def test_svg_to_symbol_requires_view_box():
    with pytest.raises(ResourceError, match="viewBox"):
        svg_to_symbol('<svg width="10" height="10"><rect/></svg>', "motif_x")


def test_svg_to_symbol_requires_svg_root():
    with pytest.raises(ResourceError):
        svg_to_symbol("<g></g>", "motif_x")


def test_flip_symbol_translates_by_view_box():
    flip = make_flip_symbol("motif_card", "10 0 100 50")
    assert flip == (
        '<symbol id="motif_card_flip" viewBox="10 0 100 50">'
        '<g transform="translate(120 0) scale(-1 1)"><use href="#motif_card" /></g></symbol>'
    )


def test_flip_symbol_bad_view_box():
    with pytest.raises(ResourceError):
        make_flip_symbol("motif_card", "0 0 100")


def test_build_library(tmp_path):
    (tmp_path / "credit-card.svg").write_text(SIMPLE_SVG, encoding="utf-8")
    (tmp_path / "lock.svg").write_text(SIMPLE_SVG, encoding="utf-8")
    library, entries = build_library(sorted(tmp_path.glob("*.svg")))
    assert [e.id for e in entries] == ["credit_card", "credit_card_flip", "lock", "lock_flip"]
    assert [e.symbol_id for e in entries] == [
        "motif_credit_card", "motif_credit_card_flip", "motif_lock", "motif_lock_flip",
    ]
    assert library.startswith('<svg xmlns="http://www.w3.org/2000/svg" style="display:none">')
    assert library.endswith("</svg>\n")
    # Every entry can be pulled back out of the library
    for entry in entries:
        assert extract_symbol(library, entry.symbol_id) is not None


def test_build_library_without_flip(tmp_path):
    (tmp_path / "lock.svg").write_text(SIMPLE_SVG, encoding="utf-8")
    library, entries = build_library([tmp_path / "lock.svg"], flip=False)
    assert [e.id for e in entries] == ["lock"]
    assert "_flip" not in library
