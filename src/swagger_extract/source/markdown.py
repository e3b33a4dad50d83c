"""Markdown document source.

Renders an OpenAPI 3.x or Swagger 2.0 description into the intermediate
markdown read back by the endpoint assembler: one `####` heading per
operation, followed by `$$$`-delimited components.
"""

import logging
import re
from http import HTTPStatus

from pydantic import BaseModel

from swagger_extract.config import DEFAULT_CONVERTER_OPTIONS, ConverterOptions
from swagger_extract.errors import GenerationError
from swagger_extract.parser.assembler import ENDPOINT_MARKER
from swagger_extract.parser.fence import COMPONENT_MARKER, FENCE
from swagger_extract.source.code_samples import SampleRequest, render_code_samples
from swagger_extract.source.examples import (
    media_example,
    primary_type,
    resolve_ref,
    sample_value,
    schema_name,
    to_json,
)
from swagger_extract.source.loader import detect_version

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
DEFAULT_TAG = "Default"


class Operation(BaseModel):
    """One method on one path, with the path-level parameters it inherits."""

    method: str
    path: str
    spec: dict
    path_parameters: list[dict] = []

    @property
    def name(self) -> str:
        return self.spec.get("operationId") or f"{self.method.upper()} {self.path}"


def generate_markdown(api: dict, options: ConverterOptions | None = None) -> str:
    """Render the markdown document for an API description.

    Raises:
        GenerationError: if the description has no version field or no paths.
    """
    options = options or DEFAULT_CONVERTER_OPTIONS
    version = detect_version(api)
    if not isinstance(api.get("paths"), dict):
        raise GenerationError("API description has no 'paths' mapping")

    groups = _group_by_tag(_collect_operations(api))
    logger.info(
        "Rendering %d operations in %d groups (%s)",
        sum(len(ops) for ops in groups.values()), len(groups), version,
    )

    parts = [_render_header(api, groups, options)]
    for tag, operations in groups.items():
        parts.append(f"{'#' * options.headings} {_escape_markers(tag)}")
        for operation in operations:
            parts.append(_render_operation(api, version, operation, options))
    return "\n\n".join(parts) + "\n"


def _collect_operations(api: dict) -> list[Operation]:
    operations = []
    for path, path_item in api["paths"].items():
        if not isinstance(path_item, dict):
            continue
        if "$ref" in path_item:
            path_item = resolve_ref(api, path_item["$ref"])
        for method in HTTP_METHODS:
            spec = path_item.get(method)
            if not isinstance(spec, dict):
                continue
            operations.append(
                Operation(
                    method=method,
                    path=str(path),
                    spec=spec,
                    path_parameters=path_item.get("parameters", []),
                )
            )
    return operations


def _group_by_tag(operations: list[Operation]) -> dict[str, list[Operation]]:
    """Group operations by their first tag. Untagged operations go to DEFAULT_TAG."""
    groups: dict[str, list[Operation]] = {}
    for op in operations:
        tags = op.spec.get("tags") or [DEFAULT_TAG]
        groups.setdefault(str(tags[0]), []).append(op)
    return groups


def _escape_markers(text: str) -> str:
    # A run of four '#' anywhere would start a new endpoint segment.
    return re.sub(r"#{4,}", lambda m: "\\#" * len(m.group()), text)


def _inline(text) -> str:
    return _escape_markers(" ".join(str(text or "").split()))


def _cell(text) -> str:
    return _inline(text).replace("|", "&#124;")


def _render_header(api: dict, groups: dict[str, list[Operation]], options: ConverterOptions) -> str:
    info = api.get("info") or {}
    lines = [f"# {_inline(info.get('title', 'API'))} {_inline(info.get('version', ''))}".rstrip()]
    if info.get("description"):
        lines += ["", _escape_markers(str(info["description"]).strip())]
    if options.toc_summary:
        lines.append("")
        for tag, operations in groups.items():
            lines.append(f"* {_inline(tag)}")
            lines += [f"  * {_inline(op.name)}" for op in operations]
    return "\n".join(lines)


def _render_block(component: str, content: str) -> str:
    return f"{COMPONENT_MARKER} {component}\n{content}\n{COMPONENT_MARKER}"


def _render_fence(label: str, content: str) -> str:
    return f"{FENCE}{label}\n{content}\n{FENCE}"


def _render_operation(
    api: dict, version: str, op: Operation, options: ConverterOptions
) -> str:
    blocks = [f"{ENDPOINT_MARKER} {op.method.upper()} {_inline(op.path)}"]

    summary = _inline(op.spec.get("summary") or op.spec.get("description"))
    if summary:
        blocks.append(f"{COMPONENT_MARKER}\n{summary}\n{COMPONENT_MARKER}")

    blocks.append(_render_block("name", _inline(op.name)))

    parameters = _parameters(api, op)
    body = _request_body(api, version, op, parameters, options)
    auth = _render_auth(api, op)

    if options.code_samples:
        request = SampleRequest(
            method=op.method.upper(),
            url=_base_url(api, version) + op.path,
            headers=_sample_headers(api, version, op, body, auth),
            body=to_json(body[1], indent=None) if body and body[1] is not None else None,
        )
        samples = render_code_samples(options.languages(), request)
        if samples:
            fences = [_render_fence(lang, code) for lang, code in samples.items()]
            blocks.append(_render_block("code", "\n".join(fences)))

    if body is not None and not options.omit_body:
        blocks.append(_render_block("body", _render_body(op, body)))

    rows = [_render_parameter(p) for p in parameters if p.get("in") != "body"]
    if rows:
        blocks.append(_render_block("parameters", "\n".join(rows)))

    responses = _render_responses(api, version, op, options)
    if responses:
        blocks.append(_render_block("responses", responses))

    callbacks = _render_callbacks(api, op)
    if callbacks:
        blocks.append(_render_block("callbacks", callbacks))

    if auth:
        blocks.append(_render_block("auth", auth))

    return "\n\n".join(blocks)


def _base_url(api: dict, version: str) -> str:
    if version == "swagger2":
        base_path = api.get("basePath", "")
        if not api.get("host"):
            return base_path.rstrip("/")
        scheme = (api.get("schemes") or ["https"])[0]
        return f"{scheme}://{api['host']}{base_path}".rstrip("/")
    servers = api.get("servers") or []
    if servers and isinstance(servers[0], dict):
        return str(servers[0].get("url", "")).rstrip("/")
    return ""


def _parameters(api: dict, op: Operation) -> list[dict]:
    """Path-level parameters overridden by operation-level ones (same name and location)."""
    merged: dict[tuple, dict] = {}
    for param in list(op.path_parameters) + list(op.spec.get("parameters", [])):
        if not isinstance(param, dict):
            continue
        if "$ref" in param:
            param = resolve_ref(api, param["$ref"])
        merged[(param.get("name"), param.get("in"))] = param
    return list(merged.values())


def _param_type(param: dict) -> str:
    schema = param.get("schema", param)
    if "$ref" in schema:
        return schema_name(schema)
    param_type = primary_type(schema) or "string"
    if param_type == "array":
        items = schema.get("items") or {}
        item_type = schema_name(items) if "$ref" in items else primary_type(items) or "string"
        return f"array[{item_type}]"
    return str(param_type)


def _render_parameter(param: dict) -> str:
    cells = [
        _cell(param.get("name")),
        _cell(param.get("in")),
        _cell(_param_type(param)),
        "true" if param.get("required") else "false",
        _cell(param.get("description")),
    ]
    return "|" + "|".join(cells) + "|"


def _is_json(media_type: str) -> bool:
    media_type = media_type.split(";")[0].strip()
    return media_type == "application/json" or media_type.endswith("+json")


def _format_label(media_type: str) -> str:
    return media_type.split(";")[0].strip().split("/")[-1]


def _request_body(
    api: dict, version: str, op: Operation, parameters: list[dict], options: ConverterOptions
) -> tuple[str, object] | None:
    """Return (media_type, example) for the request body, or None when there is none.

    The example is None when samples are disabled or the body is not JSON.
    """
    if version == "swagger2":
        body_param = next((p for p in parameters if p.get("in") == "body"), None)
        if body_param is None:
            return None
        consumes = op.spec.get("consumes") or api.get("consumes") or ["application/json"]
        media_type = next((m for m in consumes if _is_json(m)), consumes[0])
        if not options.sample or not _is_json(media_type):
            return media_type, None
        return media_type, sample_value(api, body_param.get("schema"))

    request_body = op.spec.get("requestBody")
    if not isinstance(request_body, dict):
        return None
    if "$ref" in request_body:
        request_body = resolve_ref(api, request_body["$ref"])
    content = request_body.get("content") or {}
    if not content:
        return None
    media_type = next((m for m in content if _is_json(m)), next(iter(content)))
    if not options.sample or not _is_json(media_type):
        return media_type, None
    return media_type, media_example(api, content[media_type] or {})


def _render_body(op: Operation, body: tuple[str, object]) -> str:
    media_type, example = body
    lines = [f"{op.method.upper()}|{op.path}"]
    if example is not None:
        lines.append(_render_fence(_format_label(media_type), to_json(example)))
    return "\n".join(lines)


def _responses(api: dict, op: Operation) -> dict[str, dict]:
    responses = {}
    for code, response in (op.spec.get("responses") or {}).items():
        if isinstance(response, dict) and "$ref" in response:
            response = resolve_ref(api, response["$ref"])
        responses[str(code)] = response if isinstance(response, dict) else {}
    return responses


def _status_meaning(code: str) -> str:
    if code == "default":
        return "Default"
    try:
        return HTTPStatus(int(code)).phrase
    except ValueError:
        return "Unknown"


def _response_schema(version: str, response: dict) -> dict | None:
    if version == "swagger2":
        return response.get("schema")
    for media_type, media in (response.get("content") or {}).items():
        if _is_json(media_type) and isinstance(media, dict):
            return media.get("schema")
    return None


def _response_example(api: dict, version: str, response: dict):
    if version == "swagger2":
        examples = response.get("examples") or {}
        for media_type, example in examples.items():
            if _is_json(media_type):
                return example
        return sample_value(api, response.get("schema"))
    for media_type, media in (response.get("content") or {}).items():
        if _is_json(media_type) and isinstance(media, dict):
            return media_example(api, media)
    return None


def _render_responses(api: dict, version: str, op: Operation, options: ConverterOptions) -> str:
    """Example fences first, then one `%` line per status code."""
    responses = _responses(api, op)
    lines = []
    if options.sample:
        for code, response in responses.items():
            example = _response_example(api, version, response)
            if example is None:
                continue
            lines.append(f"> {code} Response")
            lines.append(_render_fence("json", to_json(example)))
    for code, response in responses.items():
        cells = [
            code,
            _cell(_status_meaning(code)),
            _cell(schema_name(_response_schema(version, response))),
            _cell(response.get("description")),
        ]
        lines.append("%" + "|".join(cells))
    return "\n".join(lines)


def _render_callbacks(api: dict, op: Operation) -> str:
    lines = []
    for name, callback in (op.spec.get("callbacks") or {}).items():
        if isinstance(callback, dict) and "$ref" in callback:
            callback = resolve_ref(api, callback["$ref"])
        for expression, path_item in (callback or {}).items():
            methods = [m.upper() for m in HTTP_METHODS if m in (path_item or {})]
            lines.append(" ".join([f"{_inline(name)}:", *methods, _inline(expression)]))
    return "\n".join(lines)


def _render_auth(api: dict, op: Operation) -> str:
    security = op.spec.get("security", api.get("security")) or []
    lines = []
    for requirement in security:
        for scheme, scopes in (requirement or {}).items():
            if scopes:
                lines.append(f"{_inline(scheme)} ( Scopes: {_inline(' '.join(scopes))} )")
            else:
                lines.append(_inline(scheme))
    return "\n".join(lines)


def _sample_headers(
    api: dict, version: str, op: Operation, body: tuple[str, object] | None, auth: str
) -> dict[str, str]:
    headers = {}
    if body is not None:
        headers["Content-Type"] = body[0]

    if version == "swagger2":
        produces = op.spec.get("produces") or api.get("produces") or []
        accept = produces[0] if produces else None
    else:
        accept = next(
            (
                media_type
                for response in _responses(api, op).values()
                for media_type in (response.get("content") or {})
            ),
            None,
        )
    if accept:
        headers["Accept"] = accept

    if auth:
        headers["Authorization"] = "Bearer {access-token}"
    return headers
