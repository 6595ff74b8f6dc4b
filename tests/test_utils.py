"""Tests for configuration table merging and small formatting helpers."""

from pointinterval.utils import defaults, ensure_dir, format_width


def test_defaults_override_wins():
    merged = defaults({"side": "both"}, {"side": "topright", "scale": 0.9})
    assert merged == {"side": "both", "scale": 0.9}


def test_defaults_order_overrides_first():
    merged = defaults({"b": 2}, {"a": 1, "b": 0, "c": 3})
    assert list(merged) == ["b", "a", "c"]


def test_defaults_does_not_mutate_inputs():
    overrides = {"fill": None}
    base = {"fill": "gray", "size": 1}
    defaults(overrides, base)
    assert overrides == {"fill": None}
    assert base == {"fill": "gray", "size": 1}


def test_defaults_none_override_value_is_kept():
    """An explicit None in the overrides must not fall back to the base value."""
    assert defaults({"fill": None}, {"fill": "gray"}) == {"fill": None}


def test_defaults_accepts_missing_tables():
    assert defaults(None, {"a": 1}) == {"a": 1}
    assert defaults({"a": 1}, None) == {"a": 1}
    assert defaults(None, None) == {}


def test_format_width():
    assert format_width(0.95) == "95%"
    assert format_width(0.665) == "66.5%"
    assert format_width("n/a") == "n/a"


def test_ensure_dir_creates_nested(tmp_path):
    target = ensure_dir(tmp_path / "a" / "b")
    assert target.is_dir()
