"""Configuration for markdown generation, parsing and fetching."""

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LANGUAGE_TABS = [
    {"shell": "Shell"},
    {"http": "HTTP"},
    {"javascript": "JavaScript"},
    {"javascript--nodejs": "Node.JS"},
    {"ruby": "Ruby"},
    {"python": "Python"},
    {"java": "Java"},
    {"go": "Go"},
]


class ConverterOptions(BaseModel):
    """Options for the markdown document source.

    The pipeline always renders with DEFAULT_CONVERTER_OPTIONS; the model
    exists so the fixed values live in one place. Rendering has one theme
    and no search, discovery or httpsnippet variants, so those are not
    options.
    """

    code_samples: bool = True
    toc_summary: bool = False
    headings: int = 2
    omit_body: bool = False
    sample: bool = True
    language_tabs: list[dict[str, str]] = DEFAULT_LANGUAGE_TABS

    def languages(self) -> list[str]:
        """Language keys in tab order."""
        return [key for tab in self.language_tabs for key in tab]


DEFAULT_CONVERTER_OPTIONS = ConverterOptions()


class ParseOptions(BaseModel):
    """Options for the markdown re-parsing stage.

    preserve_response_metadata: when a response example fence closes, merge
    the example into the existing record instead of replacing the record.
    """

    preserve_response_metadata: bool = False


class FetchSettings(BaseSettings):
    """Settings for retrieving a definition over HTTP.

    Read from SWAGGER_EXTRACT_TIMEOUT (seconds, unset means no timeout) and
    SWAGGER_EXTRACT_USER_AGENT.
    """

    model_config = SettingsConfigDict(env_prefix="SWAGGER_EXTRACT_")

    timeout: float | None = None
    user_agent: str = "swagger-extract"
