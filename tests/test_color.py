import pytest

from wavelines.core.color import (
    FALLBACK_COLOR,
    Rgba,
    darken,
    format_color,
    lighten,
    parse_color,
    shift_color,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("rgb(1,2,3)", Rgba(1, 2, 3, 1.0)),
        ("rgba(255, 255, 255, 0.9)", Rgba(255, 255, 255, 0.9)),
        ("rgba(57, 197, 187, 0.9)", Rgba(57, 197, 187, 0.9)),
        ("rgba(0,0,0,0)", Rgba(0, 0, 0, 0.0)),
        ("rgba(10, 20, 30, 1)", Rgba(10, 20, 30, 1.0)),
        ("rgba(10, 20, 30, .5)", Rgba(10, 20, 30, 0.5)),
        ("rgb(0010,20,030)", Rgba(10, 20, 30, 1.0)),
    ],
)
def test_parse_valid(text, expected):
    assert parse_color(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        "white",
        "#ffffff",
        "rgb(1,2)",
        "rgb(256, 0, 0)",
        "rgb(0256, 0, 0)",
        "rgba(1, 2, 3, 1.5)",
        "rgba(1, 2, 3, 0.5.5)",
        "rgb(-1, 2, 3)",
        "hsl(10, 20%, 30%)",
        None,
    ],
)
def test_parse_malformed_falls_back(text):
    assert parse_color(text) == FALLBACK_COLOR == Rgba(255, 255, 255, 1.0)


@pytest.mark.parametrize(
    "text",
    [
        "rgba(180, 220, 255, 0.8)",
        "rgba(200, 200, 255, 0.85)",
        "rgb(12, 34, 56)",
        "rgba(0, 0, 0, 0.125)",
        "rgba(10, 20, 30, 0.00001)",
    ],
)
def test_round_trip_preserves_channels(text):
    color = parse_color(text)
    encoded = format_color(color)
    assert "e" not in encoded
    again = parse_color(encoded)
    assert again == color


def test_format_uses_rgba_grammar():
    assert format_color(Rgba(1, 2, 3, 0.85)) == "rgba(1, 2, 3, 0.85)"
    assert format_color(Rgba(1, 2, 3, 1.0)) == "rgba(1, 2, 3, 1)"
    assert format_color(Rgba(1, 2, 3, 1e-06)) == "rgba(1, 2, 3, 0.000001)"


def test_shift_clamps_and_keeps_alpha():
    c = Rgba(230, 10, 128, 0.9)
    assert lighten(c) == Rgba(255, 60, 178, 0.9)
    assert darken(c) == Rgba(210, 0, 108, 0.9)
    assert shift_color(c, 0) == c


def test_rgba8_scales_alpha():
    assert Rgba(1, 2, 3, 0.4).to_rgba8() == (1, 2, 3, 102)
