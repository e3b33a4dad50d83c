"""Field extractors: turn one component's raw text into a structured value.

Each extractor receives the text captured between a pair of `$$$`
markers, untrimmed.
"""

import json
from typing import Any, Callable

from swagger_extract.config import ParseOptions
from swagger_extract.errors import UnknownComponentError
from swagger_extract.parser.fence import FENCE, BlockScanner, scan_blocks
from swagger_extract.parser.models import (
    BodyRecord,
    Component,
    EndpointInfo,
    Parameter,
    ResponseRecord,
)

Extractor = Callable[[str], Any]


def _field(items: list[str], index: int) -> str | None:
    return items[index] if index < len(items) else None


def _split_row(line: str) -> list[str]:
    return [item for item in line.split("|") if item != ""]


def _non_empty_lines(source: str) -> list[str]:
    return [line for line in source.split("\n") if line != ""]


def extract_code_samples(source: str) -> dict[str, str]:
    """Map each fenced block's language label to its stripped code."""
    samples = {}
    for block in scan_blocks(source.split("\n")):
        samples[block.label] = block.body.strip()
    return samples


def extract_body(source: str) -> BodyRecord:
    """Parse a body component: a `TYPE|url` line followed by fenced payloads.

    Raises:
        json.JSONDecodeError: if a fenced payload is not valid JSON.
    """
    lines = source.split("\n")
    info = lines[0].strip().split("|")

    formats = {}
    for block in scan_blocks(lines):
        formats[block.label] = json.loads(block.body)

    return BodyRecord(
        endpoint=EndpointInfo(type=_field(info, 0), url=_field(info, 1)),
        formats=formats,
    )


def extract_parameters(source: str) -> dict[str | None, Parameter]:
    """Parse `name|in|type|required|description` rows, one parameter per line."""
    parameters = {}
    for line in _non_empty_lines(source):
        items = _split_row(line)
        parameters[_field(items, 0)] = Parameter(
            location=_field(items, 1),
            param_type=_field(items, 2),
            required=_field(items, 3),
            description=_field(items, 4),
        )
    return parameters


def extract_responses(
    source: str, options: ParseOptions | None = None
) -> dict[str | None, ResponseRecord]:
    """Parse response examples (`> code` + fence) and `%` metadata lines.

    By default a closing example fence replaces the whole record for the
    current status code, so `%` fields written earlier for that code are
    lost. Set ``preserve_response_metadata`` to merge instead.

    Raises:
        json.JSONDecodeError: if an example fence is not valid JSON.
    """
    options = options or ParseOptions()
    responses: dict[str | None, dict] = {}
    scanner = BlockScanner(FENCE)
    current_status_code: str | None = ""

    for line in _non_empty_lines(source):
        if line.startswith(">"):
            current_status_code = _field(line.split(" "), 1)
            responses[current_status_code] = {}

        block = scanner.feed(line)
        if block is not None:
            example = json.loads(block.body)
            if options.preserve_response_metadata:
                responses.setdefault(current_status_code, {})["example"] = example
            else:
                responses[current_status_code] = {"example": example}

        if line.startswith("%"):
            items = _split_row(line[1:])
            record = responses.setdefault(_field(items, 0), {})
            record["meaning"] = _field(items, 1)
            record["schema"] = _field(items, 2)
            record["description"] = _field(items, 3)

    scanner.finish()
    return {code: ResponseRecord(**record) for code, record in responses.items()}


def extract_text(source: str) -> str:
    return source.strip()


def get_extractor(
    component: str | Component, options: ParseOptions | None = None
) -> Extractor:
    """Return the extractor registered for a component name.

    Raises:
        UnknownComponentError: if the name is not a known component.
    """
    try:
        kind = Component(component)
    except ValueError:
        raise UnknownComponentError(str(component)) from None

    if kind is Component.RESPONSES:
        return lambda source: extract_responses(source, options)
    return EXTRACTORS[kind]


EXTRACTORS: dict[Component, Extractor] = {
    Component.NAME: extract_text,
    Component.CODE: extract_code_samples,
    Component.BODY: extract_body,
    Component.PARAMETERS: extract_parameters,
    Component.RESPONSES: extract_responses,
    Component.CALLBACKS: extract_text,
    Component.AUTH: extract_text,
}
