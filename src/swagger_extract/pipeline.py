"""End-to-end conversion: fetch -> load -> generate markdown -> parse.

Every stage raises on failure and nothing is retried, so the raised
exception is the single error channel. submit_retrieval runs the same
chain on an executor and reports through a Future.
"""

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from swagger_extract.config import (
    DEFAULT_CONVERTER_OPTIONS,
    FetchSettings,
    ParseOptions,
)
from swagger_extract.parser.assembler import convert_markdown_to_data
from swagger_extract.parser.models import EndpointRecord
from swagger_extract.source.loader import fetch_text, load_api_description, read_source
from swagger_extract.source.markdown import generate_markdown

logger = logging.getLogger(__name__)


def generate_markdown_from_text(text: str) -> str:
    """Render definition text (YAML or JSON) with the fixed converter options."""
    api = load_api_description(text)
    return generate_markdown(api, DEFAULT_CONVERTER_OPTIONS)


def retrieve_data_from_text(
    text: str, options: ParseOptions | None = None
) -> dict[str, EndpointRecord]:
    markdown = generate_markdown_from_text(text)
    records = convert_markdown_to_data(markdown, options)
    logger.info("Extracted %d endpoints", len(records))
    return records


def retrieve_data_from_swagger_url(
    url: str,
    options: ParseOptions | None = None,
    settings: FetchSettings | None = None,
) -> dict[str, EndpointRecord]:
    """Fetch a definition from a URL and return its endpoint records."""
    return retrieve_data_from_text(fetch_text(url, settings), options)


def retrieve_data_from_source(
    location: str,
    options: ParseOptions | None = None,
    settings: FetchSettings | None = None,
) -> dict[str, EndpointRecord]:
    """Like retrieve_data_from_swagger_url, but also accepts a local path."""
    return retrieve_data_from_text(read_source(location, settings), options)


def submit_retrieval(
    url: str,
    executor: Executor | None = None,
    options: ParseOptions | None = None,
    settings: FetchSettings | None = None,
) -> Future:
    """Run retrieve_data_from_swagger_url in the background.

    ``future.result()`` returns the records or re-raises the failure. When
    no executor is given a single-use one is created and shut down once
    the work is submitted.
    """
    if executor is not None:
        return executor.submit(retrieve_data_from_swagger_url, url, options, settings)

    pool = ThreadPoolExecutor(max_workers=1)
    future = pool.submit(retrieve_data_from_swagger_url, url, options, settings)
    pool.shutdown(wait=False)
    return future
