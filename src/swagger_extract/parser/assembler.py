"""Endpoint assembler: split generated markdown into per-endpoint records.

The document is cut on `####` headings; inside each endpoint segment,
`$$$ <component>` ... `$$$` pairs delimit the components.
"""

import logging

from swagger_extract.config import ParseOptions
from swagger_extract.errors import MissingEndpointNameError
from swagger_extract.parser.extractors import get_extractor
from swagger_extract.parser.fence import COMPONENT_MARKER, scan_blocks
from swagger_extract.parser.models import Component, EndpointRecord

logger = logging.getLogger(__name__)

ENDPOINT_MARKER = "####"


def split_endpoints(markdown: str) -> list[str]:
    """Return one segment per endpoint heading; the preamble is dropped."""
    return markdown.strip().split(ENDPOINT_MARKER)[1:]


def convert_markdown_to_data(
    markdown: str, options: ParseOptions | None = None
) -> dict[str, EndpointRecord]:
    """Parse a generated markdown document into records keyed by endpoint name.

    Raises:
        UnknownComponentError: a block names a component that does not exist.
        MissingEndpointNameError: a component closed before the `name` block.
        json.JSONDecodeError: a body or response example is not valid JSON.
    """
    records: dict[str, dict] = {}

    for segment in split_endpoints(markdown):
        current: dict | None = None

        for block in scan_blocks(segment.split("\n"), COMPONENT_MARKER):
            if block.label == "":
                continue

            if block.label == Component.NAME.value:
                endpoint_name = block.body.strip()
                current = records[endpoint_name] = {"name": endpoint_name}
                continue

            extractor = get_extractor(block.label, options)
            if current is None:
                raise MissingEndpointNameError(block.label)
            logger.debug("Extracting %s for %s", block.label, current["name"])
            current[block.label] = extractor(block.body)

    logger.debug("Assembled %d endpoint records", len(records))
    return {name: EndpointRecord(**fields) for name, fields in records.items()}


def records_to_dict(records: dict[str, EndpointRecord]) -> dict[str, dict]:
    """Convert assembled records into plain JSON-ready dictionaries."""
    return {name: record.to_dict() for name, record in records.items()}
