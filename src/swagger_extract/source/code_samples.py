"""Per-language request snippets for the `code` component."""

import json
import logging
from typing import Callable

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class SampleRequest(BaseModel):
    """What a code sample needs to know about one operation."""

    method: str
    url: str
    headers: dict[str, str] = {}
    body: str | None = None  # compact JSON text


def _render_shell(req: SampleRequest) -> str:
    lines = [f"curl -X {req.method} {req.url}"]
    for name, value in req.headers.items():
        lines.append(f"  -H '{name}: {value}'")
    if req.body is not None:
        lines.append(f"  -d '{req.body}'")
    return " \\\n".join(lines)


def _render_http(req: SampleRequest) -> str:
    lines = [f"{req.method} {req.url} HTTP/1.1"]
    lines += [f"{name}: {value}" for name, value in req.headers.items()]
    if req.body is not None:
        lines += ["", req.body]
    return "\n".join(lines)


def _js_headers(req: SampleRequest) -> str:
    rows = ",\n".join(f"  '{name}':'{value}'" for name, value in req.headers.items())
    return f"const headers = {{\n{rows}\n}};"


def _render_fetch(req: SampleRequest, prelude: str = "") -> str:
    parts = []
    if prelude:
        parts.append(prelude)
    if req.body is not None:
        parts.append(f"const inputBody = JSON.stringify({req.body});")
    parts.append(_js_headers(req))
    body_line = "  body: inputBody,\n" if req.body is not None else ""
    parts.append(
        f"fetch('{req.url}',\n"
        "{\n"
        f"  method: '{req.method}',\n"
        f"{body_line}"
        "  headers: headers\n"
        "})\n"
        ".then(function(res) {\n"
        "    return res.json();\n"
        "}).then(function(body) {\n"
        "    console.log(body);\n"
        "});"
    )
    return "\n\n".join(parts)


def _render_javascript(req: SampleRequest) -> str:
    return _render_fetch(req)


def _render_nodejs(req: SampleRequest) -> str:
    return _render_fetch(req, prelude="const fetch = require('node-fetch');")


def _render_ruby(req: SampleRequest) -> str:
    rows = ",\n".join(f"  '{name}' => '{value}'" for name, value in req.headers.items())
    payload = f"\n  payload: {json.dumps(req.body)}," if req.body is not None else ""
    return (
        "require 'rest-client'\n"
        "require 'json'\n\n"
        f"headers = {{\n{rows}\n}}\n\n"
        f"result = RestClient::Request.execute(\n"
        f"  method: :{req.method.lower()},\n"
        f"  url: '{req.url}',{payload}\n"
        "  headers: headers\n"
        ")\n\n"
        "p JSON.parse(result)"
    )


def _render_python(req: SampleRequest) -> str:
    rows = ",\n".join(f"  '{name}': '{value}'" for name, value in req.headers.items())
    body_arg = f", data={json.dumps(req.body)}" if req.body is not None else ""
    return (
        "import requests\n"
        f"headers = {{\n{rows}\n}}\n\n"
        f"r = requests.{req.method.lower()}('{req.url}', headers=headers{body_arg})\n\n"
        "print(r.json())"
    )


def _render_java(req: SampleRequest) -> str:
    lines = [
        f'URL obj = new URL("{req.url}");',
        "HttpURLConnection con = (HttpURLConnection) obj.openConnection();",
        f'con.setRequestMethod("{req.method}");',
    ]
    lines += [
        f'con.setRequestProperty("{name}", "{value}");'
        for name, value in req.headers.items()
    ]
    if req.body is not None:
        lines += [
            "con.setDoOutput(true);",
            "try (OutputStream os = con.getOutputStream()) {",
            f"    os.write({json.dumps(req.body)}.getBytes(\"utf-8\"));",
            "}",
        ]
    lines += [
        "int responseCode = con.getResponseCode();",
        "BufferedReader in = new BufferedReader(",
        "    new InputStreamReader(con.getInputStream()));",
        "String inputLine;",
        "StringBuffer response = new StringBuffer();",
        "while ((inputLine = in.readLine()) != null) {",
        "    response.append(inputLine);",
        "}",
        "in.close();",
        "System.out.println(response.toString());",
    ]
    return "\n".join(lines)


def _render_go(req: SampleRequest) -> str:
    rows = "\n".join(
        f'        "{name}": []string{{"{value}"}},' for name, value in req.headers.items()
    )
    imports = '       "net/http"\n'
    data = "nil"
    if req.body is not None:
        imports = '       "bytes"\n' + imports
        data = f"bytes.NewBufferString({json.dumps(req.body)})"
    return (
        "package main\n\n"
        f"import (\n{imports})\n\n"
        "func main() {\n\n"
        f"    headers := map[string][]string{{\n{rows}\n    }}\n\n"
        f'    req, err := http.NewRequest("{req.method}", "{req.url}", {data})\n'
        "    req.Header = headers\n\n"
        "    client := &http.Client{}\n"
        "    resp, err := client.Do(req)\n"
        "    // ...\n"
        "}"
    )


RENDERERS: dict[str, Callable[[SampleRequest], str]] = {
    "shell": _render_shell,
    "http": _render_http,
    "javascript": _render_javascript,
    "javascript--nodejs": _render_nodejs,
    "ruby": _render_ruby,
    "python": _render_python,
    "java": _render_java,
    "go": _render_go,
}


def render_code_samples(languages: list[str], req: SampleRequest) -> dict[str, str]:
    """Render one snippet per supported language, in tab order."""
    samples = {}
    for language in languages:
        renderer = RENDERERS.get(language)
        if renderer is None:
            logger.debug("No code sample template for %s", language)
            continue
        samples[language] = renderer(req)
    return samples
