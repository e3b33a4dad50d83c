"""Example payloads generated from OpenAPI / Swagger schemas."""

import json
from typing import Any

MAX_DEPTH = 8

_STRING_FORMATS = {
    "date": "2019-08-24",
    "date-time": "2019-08-24T14:15:22Z",
    "email": "user@example.com",
    "uuid": "095be615-a8ad-4c33-8e9c-c7612fbf6c9f",
    "uri": "http://example.com",
    "hostname": "example.com",
    "ipv4": "192.168.0.1",
    "binary": "string",
    "byte": "c3RyaW5n",
}


def resolve_ref(api: dict, ref: str) -> dict:
    """Resolve a local JSON pointer such as '#/components/schemas/Pet'."""
    if not ref.startswith("#/"):
        return {}
    node: Any = api
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            return {}
        node = node[part]
    return node if isinstance(node, dict) else {}


def schema_name(schema: dict | None) -> str:
    """Short name shown in the responses table ('Pet', '[Pet]', 'Inline', 'None')."""
    if not schema:
        return "None"
    if "$ref" in schema:
        return schema["$ref"].rsplit("/", 1)[-1]
    if primary_type(schema) == "array":
        items = schema.get("items") or {}
        if "$ref" in items:
            return f"[{items['$ref'].rsplit('/', 1)[-1]}]"
    return "Inline"


def primary_type(schema: dict) -> str | None:
    """The schema type, taking the first non-null entry of a type list."""
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        return next((t for t in schema_type if t != "null"), None)
    return schema_type


def sample_value(api: dict, schema: dict | None, depth: int = 0) -> Any:
    """Build an example value for a schema.

    Explicit examples win, then defaults and enums, then a placeholder
    derived from the type. References are followed up to MAX_DEPTH.
    """
    if not isinstance(schema, dict) or depth > MAX_DEPTH:
        return None

    if "$ref" in schema:
        return sample_value(api, resolve_ref(api, schema["$ref"]), depth + 1)
    if "example" in schema:
        return schema["example"]
    if isinstance(schema.get("examples"), list) and schema["examples"]:
        return schema["examples"][0]
    if "default" in schema:
        return schema["default"]
    if schema.get("enum"):
        return schema["enum"][0]

    for combiner in ("allOf", "oneOf", "anyOf"):
        if combiner in schema:
            parts = [sample_value(api, s, depth + 1) for s in schema[combiner]]
            if combiner != "allOf":
                return parts[0] if parts else None
            merged = {}
            for part in parts:
                if isinstance(part, dict):
                    merged.update(part)
            return merged

    schema_type = primary_type(schema)

    if schema_type == "string":
        return _STRING_FORMATS.get(schema.get("format"), "string")
    if schema_type == "integer":
        return 0
    if schema_type == "number":
        return 0
    if schema_type == "boolean":
        return True
    if schema_type == "array":
        return [sample_value(api, schema.get("items", {}), depth + 1)]
    if schema_type == "object" or "properties" in schema:
        return {
            name: sample_value(api, prop, depth + 1)
            for name, prop in (schema.get("properties") or {}).items()
        }
    return None


def media_example(api: dict, media: dict) -> Any:
    """Example for an OpenAPI 3 media type object: example, examples, then schema."""
    if "example" in media:
        return media["example"]
    examples = media.get("examples")
    if isinstance(examples, dict) and examples:
        first = next(iter(examples.values()))
        if isinstance(first, dict) and "$ref" in first:
            first = resolve_ref(api, first["$ref"])
        if isinstance(first, dict) and "value" in first:
            return first["value"]
    return sample_value(api, media.get("schema"))


def to_json(value: Any, indent: int | None = 2) -> str:
    """JSON text with '#' escaped so payloads never contain heading markers."""
    return json.dumps(value, indent=indent, ensure_ascii=False).replace("#", "\\u0023")
