"""Runtime mutability of properties through the dynamic configuration store."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Iterable

KeyPredicate = Callable[[str], bool]


class MutabilityKind(enum.Enum):
    """How a property reacts to a change in ZooKeeper."""

    NOT_MUTABLE = "no"
    MUTABLE = "yes"
    MUTABLE_REQUIRES_RESTART = "restart"


@dataclass(frozen=True)
class Mutability:
    """Tagged mutability result.

    ``scope`` names the server process that needs a restart and is only set
    for :attr:`MutabilityKind.MUTABLE_REQUIRES_RESTART`.
    """

    kind: MutabilityKind
    scope: str | None = None

    def describe(self) -> str:
        """Return the plain-text wording used in generated documents."""
        if self.kind is MutabilityKind.MUTABLE_REQUIRES_RESTART:
            return f"yes but requires restart of the {self.scope}"
        return self.kind.value


NOT_MUTABLE = Mutability(MutabilityKind.NOT_MUTABLE)
MUTABLE = Mutability(MutabilityKind.MUTABLE)


def zookeeper_mutability(
    key: str,
    is_mutable: KeyPredicate,
    is_fixed: KeyPredicate,
) -> Mutability:
    """Classify *key* using the injected *is_mutable* and *is_fixed* predicates."""
    if not is_mutable(key):
        return NOT_MUTABLE
    if is_fixed(key):
        return Mutability(MutabilityKind.MUTABLE_REQUIRES_RESTART, key.split(".")[0])
    return MUTABLE


def key_matcher(entries: Iterable[str]) -> KeyPredicate:
    """Build a predicate matching exact keys and ``prefix.`` entries."""
    exact: set[str] = set()
    prefixes: list[str] = []
    for entry in entries:
        if not isinstance(entry, str) or not entry:
            raise ValueError("key matcher entries must be non-empty strings")
        if entry.endswith("."):
            prefixes.append(entry)
        else:
            exact.add(entry)
    frozen_prefixes = tuple(prefixes)

    def matches(key: str) -> bool:
        return key in exact or key.startswith(frozen_prefixes)

    return matches


def never(_key: str) -> bool:
    return False
