"""Tests for document generation."""

from __future__ import annotations

import io
import re
from pathlib import Path

import pytest

from config_docgen.catalog import PropertyType, build_catalog, load_catalog
from config_docgen.config import load_config
from config_docgen.errors import (
    InvalidInvocationError,
    SinkUnavailableError,
    WriteFailureError,
)
from config_docgen.generate import ConfigurationDocGen, generate_docs, render_docs

TYPES = [
    PropertyType("SIZE", "A size in bytes."),
    PropertyType("PREFIX", "This property is a prefix."),
    PropertyType("BOOLEAN", "true or false."),
]

_ROW_KEY = re.compile(
    r'^\| <a name="[^"]+" class="prop"></a> (?:\*\*)?([^ *|]+)',
    re.MULTILINE,
)


def _row_keys(rendered: str) -> list[str]:
    return _ROW_KEY.findall(rendered)


def _type_rows(rendered: str) -> list[str]:
    section = rendered.split("### Property Types", 1)[1]
    return [line for line in section.splitlines() if line.startswith("| ")][1:]


class _RecordingRenderer:
    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def page_header(self) -> None:
        self.calls.append(("page_header", None))

    def begin_section(self, name: str) -> None:
        self.calls.append(("begin_section", name))

    def begin_table(self, column_label: str) -> None:
        self.calls.append(("begin_table", column_label))

    def prefix_section(self, prop) -> None:
        self.calls.append(("prefix_section", prop.key))

    def property(self, prop) -> None:
        self.calls.append(("property", prop.key))

    def property_type_descriptions(self, types) -> None:
        self.calls.append(("types", [prop_type.name for prop_type in types]))

    def finish(self) -> None:
        self.calls.append(("finish", None))


def test_generate_docs_matches_reference(tmp_path: Path) -> None:
    root = Path(__file__).resolve().parents[1]
    fixture_root = root / "tests" / "fixtures" / "01_simple"
    catalog = load_catalog(fixture_root / "catalog.yml")
    page = load_config(fixture_root / "page-config.toml")
    output = tmp_path / "docs" / "configuration.md"

    generate_docs(catalog, output, page=page)

    generated = output.read_text(encoding="utf-8")
    expected = (fixture_root / "out" / "config.md").read_text(encoding="utf-8")
    assert generated == expected


def test_generator_invokes_renderer_in_document_order() -> None:
    catalog = build_catalog(
        TYPES,
        [
            {"key": "b.size", "type": "SIZE"},
            {"key": "a.", "type": "PREFIX"},
            {"key": "c.hidden", "type": "BOOLEAN", "experimental": True},
        ],
    )
    renderer = _RecordingRenderer()

    ConfigurationDocGen(catalog, renderer).generate()

    assert renderer.calls == [
        ("page_header", None),
        ("begin_table", "Property"),
        ("prefix_section", "a."),
        ("property", "b.size"),
        ("begin_section", "Property Types"),
        ("begin_table", "Type"),
        ("types", ["SIZE", "BOOLEAN"]),
        ("finish", None),
    ]


def test_rows_are_sorted_by_key() -> None:
    keys = ["tserver.memory", "general.", "table.file.max", "a.z", "a.b", "table."]
    catalog = build_catalog(
        TYPES,
        [
            {"key": key, "type": "PREFIX" if key.endswith(".") else "SIZE"}
            for key in keys
        ],
    )

    rendered = render_docs(catalog)

    assert _row_keys(rendered) == sorted(keys)


def test_experimental_properties_leave_no_trace() -> None:
    catalog = build_catalog(
        TYPES,
        [
            {"key": "table.visible", "type": "SIZE", "default": "1K"},
            {"key": "table.secretfeature", "type": "SIZE", "experimental": True},
            {"key": "secretprefix.", "type": "PREFIX", "experimental": True},
        ],
    )

    rendered = render_docs(catalog)

    assert "secretfeature" not in rendered
    assert "secretprefix" not in rendered
    assert _row_keys(rendered) == ["table.visible"]


def test_each_property_rendered_once_in_its_form() -> None:
    catalog = build_catalog(
        TYPES,
        [
            {"key": "general.custom.", "type": "PREFIX"},
            {"key": "general.custom", "type": "SIZE"},
        ],
    )

    rendered = render_docs(catalog)

    assert rendered.count('name="general_custom_-prefix"') == 1
    assert rendered.count("**general.custom.***") == 1
    leaf = '<a name="general_custom" class="prop"></a> general.custom |'
    assert rendered.count(leaf) == 1
    assert rendered.count("**type:**") == 1


def test_type_table_excludes_prefix() -> None:
    catalog = build_catalog(TYPES, [])

    rows = _type_rows(render_docs(catalog))

    assert len(rows) == len(TYPES) - 1
    assert all(not row.startswith("| PREFIX ") for row in rows)
    for row in rows:
        description = row.split("|")[2].strip()
        assert description


def test_render_docs_is_idempotent() -> None:
    root = Path(__file__).resolve().parents[1]
    catalog = load_catalog(root / "tests" / "fixtures" / "01_simple" / "catalog.yml")

    assert render_docs(catalog) == render_docs(catalog)


def test_end_to_end_example() -> None:
    catalog = build_catalog(
        TYPES,
        [
            {"key": "table.split.threshold", "type": "SIZE", "default": "1G"},
            {
                "key": "general.prefix",
                "type": "PREFIX",
                "default": "",
                "deprecated": True,
            },
        ],
    )

    rendered = render_docs(catalog)
    property_table = rendered.split("### Property Types", 1)[0]
    rows = [line for line in property_table.splitlines() if line.startswith("| <a")]

    assert len(rows) == 2
    assert rows[0].startswith(
        '| <a name="general_prefix-prefix" class="prop"></a> **general.prefix***'
    )
    assert "**Deprecated.** " in rows[0]
    assert "~~" in rows[0]
    assert rows[1].startswith(
        '| <a name="table_split_threshold" class="prop"></a> table.split.threshold |'
    )
    assert "~~" not in rows[1]
    assert _type_rows(rendered)


def test_generate_docs_rejects_unknown_format(tmp_path: Path) -> None:
    output = tmp_path / "out.adoc"
    with pytest.raises(InvalidInvocationError, match="unknown output format"):
        generate_docs(build_catalog(TYPES, []), output, fmt="asciidoc")
    assert not output.exists()


def test_generate_docs_requires_destination() -> None:
    with pytest.raises(InvalidInvocationError, match="destination"):
        generate_docs(build_catalog(TYPES, []), "")


def test_generate_docs_reports_unavailable_sink(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(SinkUnavailableError, match="cannot open"):
        generate_docs(build_catalog(TYPES, []), blocker / "config.md")


def test_generate_docs_wraps_write_failures(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    from config_docgen import codegen_markdown

    def _fail(self, _name: str) -> None:
        raise OSError("No space left on device")

    monkeypatch.setattr(codegen_markdown.MarkdownRenderer, "begin_section", _fail)

    with pytest.raises(WriteFailureError, match="No space left on device") as excinfo:
        generate_docs(build_catalog(TYPES, []), tmp_path / "config.md")
    assert isinstance(excinfo.value.__cause__, OSError)
    assert (tmp_path / "config.md").read_text(encoding="utf-8").startswith("---\n")


def test_generate_docs_wraps_failures_on_close(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    class _FullDisk(io.StringIO):
        failed = False

        def close(self) -> None:
            if not self.failed:
                self.failed = True
                raise OSError("Disk quota exceeded")
            super().close()

    monkeypatch.setattr(Path, "open", lambda self, *args, **kwargs: _FullDisk())

    with pytest.raises(WriteFailureError, match="Disk quota exceeded"):
        generate_docs(build_catalog(TYPES, []), tmp_path / "config.md")


def test_prefix_and_leaf_anchors_do_not_collide() -> None:
    catalog = build_catalog(
        TYPES,
        [
            {"key": "general.custom.", "type": "PREFIX"},
            {"key": "general.custom.prefix", "type": "SIZE"},
        ],
    )

    anchors = re.findall(r'<a name="([^"]+)"', render_docs(catalog))

    assert sorted(anchors) == ["general_custom_-prefix", "general_custom_prefix"]
