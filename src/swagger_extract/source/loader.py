"""Load an OpenAPI / Swagger definition from a URL, a file or raw text."""

import logging
from pathlib import Path

import requests
import yaml

from swagger_extract.config import FetchSettings
from swagger_extract.errors import FetchError, InvalidApiDescriptionError

logger = logging.getLogger(__name__)


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def fetch_text(url: str, settings: FetchSettings | None = None) -> str:
    """Download a definition as text. No retries.

    Raises:
        FetchError: on connection failures, timeouts and HTTP error statuses.
    """
    settings = settings or FetchSettings()
    logger.info("Fetching %s", url)
    try:
        response = requests.get(
            url,
            timeout=settings.timeout,
            headers={"User-Agent": settings.user_agent},
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(url, str(e)) from e
    return response.text


def read_source(location: str, settings: FetchSettings | None = None) -> str:
    """Read definition text from a URL or a local path."""
    if is_url(location):
        return fetch_text(location, settings)
    logger.info("Reading %s", location)
    return Path(location).read_text(encoding="utf-8")


def load_api_description(text: str) -> dict:
    """Parse YAML or JSON definition text into a mapping.

    Raises:
        InvalidApiDescriptionError: if the text is not YAML/JSON or not a mapping.
    """
    try:
        api = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidApiDescriptionError(f"Could not parse API description: {e}") from e

    if not isinstance(api, dict):
        raise InvalidApiDescriptionError(
            f"API description must be a mapping, got {type(api).__name__}"
        )
    return api


def detect_version(api: dict) -> str:
    """Return 'openapi3' or 'swagger2'."""
    if "swagger" in api:
        return "swagger2"
    if "openapi" in api:
        return "openapi3"
    raise InvalidApiDescriptionError("Missing 'openapi' or 'swagger' version field")
