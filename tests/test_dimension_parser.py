"""
Tests for mapping dimension numbers onto product fields.
"""

from __future__ import annotations

from quotebot.application.utils.dimension_parser import merge_dimensions, parse_dimensions
from quotebot.domain.entities.collected_data import Dimension
from quotebot.infrastructure.catalog.catalog_data import GUSSET, HEIGHT, WIDTH

FLAT = (WIDTH, HEIGHT)
STAND_UP = (WIDTH, HEIGHT, GUSSET)


def test_two_field_product():
    assert parse_dimensions("5x4", FLAT) == [
        Dimension(name="Width", value=5.0, unit="inches"),
        Dimension(name="Height", value=4.0, unit="inches"),
    ]


def test_separators():
    for text in ("5 x 4", "5 by 4", "5, 4", "5 4", "5*4"):
        assert [d.value for d in parse_dimensions(text, FLAT)] == [5.0, 4.0], text


def test_three_field_product():
    parsed = parse_dimensions("5x7x2.5", STAND_UP)
    assert [(d.name, d.value) for d in parsed] == [("Width", 5.0), ("Height", 7.0), ("Gusset", 2.5)]


def test_partial_input_keeps_cursor():
    parsed = parse_dimensions("5x4", STAND_UP)
    dimensions, cursor = merge_dimensions((), parsed, STAND_UP)
    assert cursor == 2

    gusset = parse_dimensions("2", STAND_UP, start_index=cursor)
    dimensions, cursor = merge_dimensions(dimensions, gusset, STAND_UP)
    assert [d.name for d in dimensions] == ["Width", "Height", "Gusset"]
    assert cursor == 3


def test_labelled_input_maps_by_name():
    parsed = parse_dimensions("height: 4, width: 5", STAND_UP)
    dimensions, cursor = merge_dimensions((), parsed, STAND_UP)
    assert [(d.name, d.value) for d in dimensions] == [("Width", 5.0), ("Height", 4.0)]
    assert cursor == 2

    short = parse_dimensions("W:5, H:4", FLAT)
    assert [(d.name, d.value) for d in short] == [("Width", 5.0), ("Height", 4.0)]


def test_out_of_range_value_stops_mapping():
    assert parse_dimensions("40x4", FLAT) == []
    assert [d.name for d in parse_dimensions("5x40", FLAT)] == ["Width"]
    assert parse_dimensions("0x4", FLAT) == []


def test_no_numbers():
    assert parse_dimensions("not sure yet", FLAT) == []
