"""Property catalog model and loading utilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml

from config_docgen.mutability import (
    NOT_MUTABLE,
    KeyPredicate,
    Mutability,
    key_matcher,
    never,
    zookeeper_mutability,
)

PREFIX = "PREFIX"


@dataclass(frozen=True)
class PropertyType:
    """A property value type and the description of its format."""

    name: str
    description: str

    @property
    def is_prefix(self) -> bool:
        return self.name == PREFIX


@dataclass(frozen=True)
class Property:
    """A single configuration property."""

    key: str
    type: PropertyType
    description: str = ""
    default: str = ""
    deprecated: bool = False
    experimental: bool = False
    mutability: Mutability = NOT_MUTABLE

    @property
    def is_prefix(self) -> bool:
        return self.type.is_prefix


@dataclass(frozen=True)
class Catalog:
    """Read-only collection of properties and their types.

    The order of *types* is the natural order used for the type table.
    """

    properties: tuple[Property, ...]
    types: tuple[PropertyType, ...]
    _by_key: dict[str, Property] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        type_names = {prop_type.name for prop_type in self.types}
        if len(type_names) != len(self.types):
            raise ValueError("catalog defines duplicate property types")
        for prop_type in self.types:
            if not prop_type.is_prefix and not prop_type.description.strip():
                raise ValueError(f"type '{prop_type.name}' must have a description")
        by_key: dict[str, Property] = {}
        for prop in self.properties:
            if prop.key in by_key:
                raise ValueError(f"duplicate property key '{prop.key}'")
            if prop.type not in self.types:
                raise ValueError(
                    f"property '{prop.key}' uses unknown type '{prop.type.name}'"
                )
            by_key[prop.key] = prop
        object.__setattr__(self, "_by_key", by_key)

    def __getitem__(self, key: str) -> Property:
        return self._by_key[key]

    def documented(self) -> list[Property]:
        """Return the non-experimental properties in ascending key order."""
        return sorted(
            (prop for prop in self.properties if not prop.experimental),
            key=lambda prop: prop.key,
        )

    def documented_types(self) -> list[PropertyType]:
        """Return every type except the prefix marker, in declaration order."""
        return [prop_type for prop_type in self.types if not prop_type.is_prefix]


def build_catalog(
    types: Iterable[PropertyType],
    entries: Iterable[dict[str, Any]],
    *,
    is_mutable: KeyPredicate = never,
    is_fixed: KeyPredicate = never,
) -> Catalog:
    """Build a catalog from raw property *entries* referencing *types* by name."""
    type_list = tuple(types)
    types_by_name = {prop_type.name: prop_type for prop_type in type_list}

    properties: list[Property] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"property entry {index} must be a mapping")
        key = entry.get("key")
        if not isinstance(key, str) or not key:
            raise ValueError(f"property entry {index} must define a string 'key'")
        type_name = entry.get("type")
        if type_name not in types_by_name:
            raise ValueError(f"property '{key}' uses unknown type '{type_name}'")
        description = entry.get("description") or ""
        if not isinstance(description, str):
            raise ValueError(f"property '{key}' description must be a string")
        properties.append(
            Property(
                key=key,
                type=types_by_name[type_name],
                description=description,
                default=_format_default(key, entry.get("default")),
                deprecated=_flag(key, entry, "deprecated"),
                experimental=_flag(key, entry, "experimental"),
                mutability=zookeeper_mutability(key, is_mutable, is_fixed),
            )
        )

    return Catalog(properties=tuple(properties), types=type_list)


def load_catalog(path: str | Path) -> Catalog:
    """Load a property catalog from the YAML file at *path*.

    Parameters
    ----------
    path:
        Location of the catalog file. It must define ``types`` and
        ``properties`` lists and may define a ``dynamic`` table with
        ``mutable`` and ``fixed`` key lists.
    """
    with Path(path).open(encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle)
        except yaml.YAMLError as err:
            raise ValueError(f"catalog file '{path}' is not valid YAML: {err}") from err
    if not isinstance(raw, dict):
        raise ValueError("catalog file must contain a mapping")

    types_raw = raw.get("types")
    if not isinstance(types_raw, list) or not types_raw:
        raise ValueError("catalog must define a 'types' list")
    types: list[PropertyType] = []
    for index, entry in enumerate(types_raw):
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise ValueError(f"type entry {index} must define a string 'name'")
        description = entry.get("description") or ""
        if not isinstance(description, str):
            raise ValueError(f"type '{entry['name']}' description must be a string")
        types.append(PropertyType(name=entry["name"], description=description))

    properties_raw = raw.get("properties")
    if not isinstance(properties_raw, list):
        raise ValueError("catalog must define a 'properties' list")

    dynamic = raw.get("dynamic") or {}
    if not isinstance(dynamic, dict):
        raise ValueError("catalog 'dynamic' must be a mapping")

    return build_catalog(
        types,
        properties_raw,
        is_mutable=key_matcher(_key_list(dynamic, "mutable")),
        is_fixed=key_matcher(_key_list(dynamic, "fixed")),
    )


def _format_default(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"property '{key}' default must be a scalar")


def _flag(key: str, entry: dict[str, Any], name: str) -> bool:
    value = entry.get(name, False)
    if not isinstance(value, bool):
        raise ValueError(f"property '{key}' {name} must be a boolean")
    return value


def _key_list(dynamic: dict[str, Any], name: str) -> list[str]:
    values = dynamic.get(name) or []
    if not isinstance(values, list):
        raise ValueError(f"catalog 'dynamic.{name}' must be a list")
    return values
