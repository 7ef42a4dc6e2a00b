"""Generation of configuration reference documents."""

from __future__ import annotations

import io
import logging
from pathlib import Path

# registers the markdown format
import config_docgen.codegen_markdown  # noqa: F401
from config_docgen.catalog import Catalog
from config_docgen.config import PageConfig
from config_docgen.errors import (
    InvalidInvocationError,
    SinkUnavailableError,
    WriteFailureError,
)
from config_docgen.renderer import DocumentRenderer, get_renderer

logger = logging.getLogger(__name__)


class ConfigurationDocGen:
    """Drive a :class:`DocumentRenderer` over the documented part of a catalog."""

    def __init__(self, catalog: Catalog, renderer: DocumentRenderer) -> None:
        self.catalog = catalog
        self.renderer = renderer

    def generate(self) -> None:
        documented = self.catalog.documented()
        logger.debug(
            "documenting %d properties (%d experimental skipped)",
            len(documented),
            len(self.catalog.properties) - len(documented),
        )

        self.renderer.page_header()

        self.renderer.begin_table("Property")
        for prop in documented:
            if prop.is_prefix:
                self.renderer.prefix_section(prop)
            else:
                self.renderer.property(prop)

        self.renderer.begin_section("Property Types")
        self.renderer.begin_table("Type")
        self.renderer.property_type_descriptions(self.catalog.documented_types())

        self.renderer.finish()


def generate_docs(
    catalog: Catalog,
    output: str | Path,
    *,
    fmt: str = "markdown",
    page: PageConfig | None = None,
) -> None:
    """Generate the *fmt* document for *catalog* at *output*."""
    if not str(output):
        raise InvalidInvocationError("an output destination is required")
    factory = get_renderer(fmt)

    output_path = Path(output)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        handle = output_path.open("w", encoding="utf-8")
    except OSError as err:
        raise SinkUnavailableError(
            f"cannot open '{output_path}' for writing: {err}"
        ) from err

    try:
        with handle:
            renderer = factory(handle, page or PageConfig())
            ConfigurationDocGen(catalog, renderer).generate()
    except OSError as err:
        raise WriteFailureError(f"writing '{output_path}' failed: {err}") from err
    logger.info("wrote %s documentation to %s", fmt, output_path)


def render_docs(
    catalog: Catalog,
    *,
    fmt: str = "markdown",
    page: PageConfig | None = None,
) -> str:
    """Return the *fmt* document for *catalog* as a string."""
    factory = get_renderer(fmt)
    buffer = io.StringIO()
    ConfigurationDocGen(catalog, factory(buffer, page or PageConfig())).generate()
    return buffer.getvalue()
