"""Data models for endpoint records recovered from generated markdown.

Every extractor converts its component text into these models so
callers get the same shapes regardless of which field produced them.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Component(str, Enum):
    """Closed set of component names that may follow a `$$$` marker."""

    NAME = "name"
    CODE = "code"
    BODY = "body"
    PARAMETERS = "parameters"
    RESPONSES = "responses"
    CALLBACKS = "callbacks"
    AUTH = "auth"


class Block(BaseModel):
    """A labelled region captured between two marker lines."""

    label: str
    body: str


class EndpointInfo(BaseModel):
    """HTTP method and URL taken from the first line of a body component."""

    type: str | None = None
    url: str | None = None


class BodyRecord(BaseModel):
    """Request body: endpoint metadata plus one parsed payload per data format."""

    endpoint: EndpointInfo
    formats: dict[str, Any] = {}

    def to_dict(self) -> dict:
        data = {"endpoint": self.endpoint.model_dump()}
        data.update(self.formats)
        return data


class Parameter(BaseModel):
    """A single parameter row. Slots are None when the row was too short."""

    model_config = ConfigDict(populate_by_name=True)

    location: str | None = Field(default=None, alias="in")
    param_type: str | None = Field(default=None, alias="type")
    required: str | None = None  # kept verbatim, e.g. "true"
    description: str | None = None


class ResponseRecord(BaseModel):
    """Per-status-code response data. Only populated fields are serialised."""

    model_config = ConfigDict(populate_by_name=True)

    example: Any = None
    meaning: str | None = None
    schema_name: str | None = Field(default=None, alias="schema")
    description: str | None = None


class EndpointRecord(BaseModel):
    """All components recovered for one endpoint."""

    name: str
    code: dict[str, str] | None = None
    body: BodyRecord | None = None
    parameters: dict[str | None, Parameter] | None = None
    responses: dict[str | None, ResponseRecord] | None = None
    callbacks: str | None = None
    auth: str | None = None

    def to_dict(self) -> dict:
        data = self.model_dump(
            by_alias=True, exclude_unset=True, exclude={"body", "parameters"}
        )
        # parameter rows always carry all four slots
        if self.parameters is not None:
            data["parameters"] = {
                key: param.model_dump(by_alias=True)
                for key, param in self.parameters.items()
            }
        elif "parameters" in self.model_fields_set:
            data["parameters"] = None
        if "body" in self.model_fields_set and self.body is not None:
            data["body"] = self.body.to_dict()
        return data
