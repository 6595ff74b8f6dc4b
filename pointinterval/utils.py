# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping


def defaults(overrides: Mapping[str, Any] | None, base: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Layer ``overrides`` on top of ``base`` and return a new table.

    Keys of ``overrides`` come first and win; keys only present in ``base``
    follow in their original order.  Neither argument is modified.
    """
    merged: dict[str, Any] = dict(overrides or {})
    for key, value in (base or {}).items():
        if key not in merged:
            merged[key] = value
    return merged


def ensure_dir(path: str | Path) -> Path:
    """
    Create ``path`` if it does not already exist and return it as ``Path``.
    """
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def format_width(value: float | int | str) -> str:
    """
    Convert an interval width (``0.95``) into a percentage label (``95%``).
    """
    try:
        x = round(float(value) * 100, 1)
    except (ValueError, TypeError):
        return str(value)

    if x.is_integer():
        return f"{x:.0f}%"
    return f"{x:.1f}%"
