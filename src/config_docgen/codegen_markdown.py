"""Markdown documentation generation."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from config_docgen.catalog import Property, PropertyType
from config_docgen.config import PageConfig
from config_docgen.renderer import register_renderer

_TEMPLATE_ENV = Environment(
    loader=FileSystemLoader(Path(__file__).resolve().parent / "templates"),
    trim_blocks=True,
    lstrip_blocks=False,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)

LINE_BREAK = "<br>"
DEPRECATED_MARKER = "**Deprecated.** "


def sanitize(text: str) -> str:
    """Replace embedded line breaks in *text* with ``<br>``."""
    return text.replace("\r\n", LINE_BREAK).replace("\n", LINE_BREAK)


def anchor(key: str) -> str:
    """Return the anchor name used for *key*."""
    return key.replace(".", "_")


def prefix_anchor(key: str) -> str:
    """Return the anchor name of the group row for *key*."""
    return f"{anchor(key)}-prefix"


class MarkdownRenderer:
    """Render a property catalog as a markdown page of pipe tables."""

    def __init__(self, out: TextIO, page: PageConfig | None = None) -> None:
        self._out = out
        self._page = page or PageConfig()

    def page_header(self) -> None:
        template = _TEMPLATE_ENV.get_template("markdown_header.md.j2")
        self._out.write(template.render(page=self._page))

    def begin_section(self, name: str) -> None:
        self._out.write(f"\n### {name}\n\n")

    def begin_table(self, column_label: str) -> None:
        self._out.write(f"| {column_label} | Description |\n")
        self._out.write("|--------------|-------------|\n")

    def prefix_section(self, prop: Property) -> None:
        self._out.write(f'| <a name="{prefix_anchor(prop.key)}" class="prop"></a> ')
        self._out.write(f"**{prop.key}*** | {self._description(prop)} |\n")

    def property(self, prop: Property) -> None:
        depr = prop.deprecated
        cells = [
            self._description(prop) + LINE_BREAK,
            _strike(f"**type:** {sanitize(prop.type.name)}", depr) + ", ",
            _strike(f"**zk mutable:** {prop.mutability.describe()}", depr) + ", ",
            _format_default(prop.default, depr),
        ]
        self._out.write(
            f'| <a name="{anchor(prop.key)}" class="prop"></a> {prop.key} | '
        )
        self._out.write("".join(cells) + " |\n")

    def property_type_descriptions(self, types: list[PropertyType]) -> None:
        for prop_type in types:
            self._out.write(
                f"| {sanitize(prop_type.name)} | {sanitize(prop_type.description)} |\n"
            )

    def finish(self) -> None:
        self._out.flush()

    @staticmethod
    def _description(prop: Property) -> str:
        marker = DEPRECATED_MARKER if prop.deprecated else ""
        return marker + _strike(sanitize(prop.description), prop.deprecated)


def _strike(text: str, deprecated: bool) -> str:
    if not deprecated:
        return text
    return f"~~{text}~~"


def _format_default(value: str, deprecated: bool) -> str:
    value = value.strip()
    if not value:
        return _strike("**default value:** empty", deprecated)
    if "\n" in value:
        # multi-line values go into a fenced block, which is never struck
        return _strike("**default value:** ", deprecated) + f"\n```\n{value}\n```\n"
    return _strike(f"**default value:** `{sanitize(value)}`", deprecated)


register_renderer("markdown", MarkdownRenderer)
