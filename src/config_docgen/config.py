"""Page configuration for generated documents."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_WARNING = "Do not edit this file. It is a generated file."


@dataclass(frozen=True)
class PageConfig:
    """Front matter and banner of a generated page."""

    title: str = "Configuration Properties"
    category: str = "administration"
    order: int = 3
    warning: str = DEFAULT_WARNING


def load_config(path: str | Path) -> PageConfig:
    """Load the ``[page]`` table of the TOML file at *path*."""
    with Path(path).open("rb") as handle:
        config = tomllib.load(handle)
    return page_config_from_dict(config.get("page", {}))


def page_config_from_dict(page_raw: Any) -> PageConfig:
    if not isinstance(page_raw, dict):
        raise ValueError("config page must be a table")
    unknown = set(page_raw) - {"title", "category", "order", "warning"}
    if unknown:
        raise ValueError(f"config page has unknown keys: {', '.join(sorted(unknown))}")

    defaults = PageConfig()
    values: dict[str, Any] = {}
    for name in ("title", "category", "warning"):
        value = page_raw.get(name, getattr(defaults, name))
        if not isinstance(value, str):
            raise ValueError(f"config page {name} must be a string")
        values[name] = value.strip()
    order = page_raw.get("order", defaults.order)
    if isinstance(order, bool) or not isinstance(order, int):
        raise ValueError("config page order must be an integer")
    values["order"] = order
    return PageConfig(**values)
