"""Exception hierarchy for swagger-extract.

Every error raised on purpose by this package inherits from
SwaggerExtractError, so callers can catch them in one clause. Malformed
JSON inside fenced blocks is the exception: it surfaces as the
json.JSONDecodeError raised by the standard parser.
"""


class SwaggerExtractError(Exception):
    """Base exception for all swagger-extract errors."""


class FetchError(SwaggerExtractError):
    """The API definition could not be retrieved (network or HTTP status)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class GenerationError(SwaggerExtractError):
    """The markdown document could not be generated from the API definition."""


class InvalidApiDescriptionError(GenerationError):
    """The definition text is not a YAML/JSON mapping."""


class UnknownComponentError(SwaggerExtractError, KeyError):
    """A `$$$` block names a component with no registered extractor."""

    def __init__(self, component: str):
        self.component = component
        super().__init__(component)

    def __str__(self) -> str:
        return f"Unknown component: {self.component!r}"


class MissingEndpointNameError(SwaggerExtractError):
    """A component closed before the endpoint's `name` component."""

    def __init__(self, component: str):
        self.component = component
        super().__init__(
            f"Component {component!r} appeared before the endpoint name"
        )
