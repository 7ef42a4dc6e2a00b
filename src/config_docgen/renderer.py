"""Output format contract and the registry of available formats."""

from __future__ import annotations

from typing import Callable, Protocol, TextIO

from config_docgen.catalog import Property, PropertyType
from config_docgen.config import PageConfig
from config_docgen.errors import InvalidInvocationError


class DocumentRenderer(Protocol):
    """Callbacks invoked in document order by the generator."""

    def page_header(self) -> None: ...

    def begin_section(self, name: str) -> None: ...

    def begin_table(self, column_label: str) -> None: ...

    def prefix_section(self, prop: Property) -> None: ...

    def property(self, prop: Property) -> None: ...

    def property_type_descriptions(self, types: list[PropertyType]) -> None: ...

    def finish(self) -> None: ...


RendererFactory = Callable[[TextIO, PageConfig], DocumentRenderer]

RENDERERS: dict[str, RendererFactory] = {}


def register_renderer(fmt: str, factory: RendererFactory) -> None:
    """Register *factory* under the format tag *fmt*."""
    RENDERERS[fmt] = factory


def get_renderer(fmt: str) -> RendererFactory:
    """Return the renderer factory registered for *fmt*."""
    try:
        return RENDERERS[fmt]
    except KeyError:
        known = ", ".join(sorted(RENDERERS)) or "none"
        raise InvalidInvocationError(
            f"unknown output format '{fmt}' (available: {known})"
        ) from None
