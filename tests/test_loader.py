from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests
from pydantic import ValidationError

from swagger_extract.config import FetchSettings
from swagger_extract.errors import FetchError, InvalidApiDescriptionError
from swagger_extract.source.loader import (
    detect_version,
    fetch_text,
    is_url,
    load_api_description,
    read_source,
)

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadApiDescription:
    def test_yaml(self):
        api = load_api_description((FIXTURES / "petstore.yaml").read_text(encoding="utf-8"))
        assert api["info"]["title"] == "Swagger Petstore"

    def test_json(self):
        api = load_api_description((FIXTURES / "petstore-swagger2.json").read_text(encoding="utf-8"))
        assert api["swagger"] == "2.0"

    def test_not_a_mapping(self):
        with pytest.raises(InvalidApiDescriptionError):
            load_api_description("- just\n- a list\n")

    def test_invalid_yaml(self):
        with pytest.raises(InvalidApiDescriptionError):
            load_api_description("key: [unclosed")


class TestDetectVersion:
    def test_openapi3(self):
        assert detect_version({"openapi": "3.0.0"}) == "openapi3"

    def test_swagger2(self):
        assert detect_version({"swagger": "2.0"}) == "swagger2"

    def test_unknown(self):
        with pytest.raises(InvalidApiDescriptionError):
            detect_version({"info": {}})


class TestFetchText:
    @patch("swagger_extract.source.loader.requests.get")
    def test_returns_body(self, mock_get):
        mock_resp = MagicMock()
        mock_resp.text = "openapi: 3.0.0"
        mock_get.return_value = mock_resp

        text = fetch_text("http://example.com/api.yaml", FetchSettings(timeout=5))
        assert text == "openapi: 3.0.0"
        call_kwargs = mock_get.call_args[1]
        assert call_kwargs["timeout"] == 5
        assert call_kwargs["headers"]["User-Agent"] == "swagger-extract"

    @patch("swagger_extract.source.loader.requests.get")
    def test_connection_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(FetchError) as exc_info:
            fetch_text("http://example.com/api.yaml", FetchSettings())
        assert exc_info.value.url == "http://example.com/api.yaml"
        assert "refused" in str(exc_info.value)

    @patch("swagger_extract.source.loader.requests.get")
    def test_http_error_status(self, mock_get):
        mock_resp = MagicMock()
        mock_resp.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        mock_get.return_value = mock_resp
        with pytest.raises(FetchError):
            fetch_text("http://example.com/missing.yaml", FetchSettings())


class TestReadSource:
    def test_is_url(self):
        assert is_url("https://example.com/a.yaml")
        assert not is_url("specs/a.yaml")

    def test_local_file(self):
        text = read_source(str(FIXTURES / "petstore.yaml"))
        assert "Swagger Petstore" in text

    @patch("swagger_extract.source.loader.fetch_text")
    def test_url_is_fetched(self, mock_fetch):
        mock_fetch.return_value = "swagger: '2.0'"
        assert read_source("http://example.com/a.yaml") == "swagger: '2.0'"
        mock_fetch.assert_called_once()


class TestFetchSettings:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SWAGGER_EXTRACT_TIMEOUT", "2.5")
        monkeypatch.setenv("SWAGGER_EXTRACT_USER_AGENT", "tester")
        settings = FetchSettings()
        assert settings.timeout == 2.5
        assert settings.user_agent == "tester"

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SWAGGER_EXTRACT_TIMEOUT", raising=False)
        monkeypatch.delenv("SWAGGER_EXTRACT_USER_AGENT", raising=False)
        settings = FetchSettings()
        assert settings.timeout is None
        assert settings.user_agent == "swagger-extract"

    def test_invalid_timeout_is_a_validation_error(self, monkeypatch):
        monkeypatch.setenv("SWAGGER_EXTRACT_TIMEOUT", "ten")
        with pytest.raises(ValidationError):
            FetchSettings()
