"""End-to-end tests with the network call mocked."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from swagger_extract.cli import main

FIXTURES = Path(__file__).parent / "fixtures"
URL = "https://petstore.swagger.io/v2/swagger.json"


def _mock_response(text: str) -> MagicMock:
    resp = MagicMock()
    resp.text = text
    resp.raise_for_status.return_value = None
    return resp


class TestEndToEnd:
    @patch("swagger_extract.source.loader.requests.get")
    def test_full_pipeline_from_url(self, mock_get, tmp_path):
        mock_get.return_value = _mock_response(
            (FIXTURES / "petstore-swagger2.json").read_text(encoding="utf-8")
        )

        output_file = tmp_path / "endpoints.json"
        markdown_file = tmp_path / "endpoints.md"
        runner = CliRunner()
        result = runner.invoke(main, [
            "extract", URL,
            "-o", str(output_file),
            "--markdown", str(markdown_file),
        ])

        assert result.exit_code == 0
        mock_get.assert_called_once()
        assert mock_get.call_args[0][0] == URL

        data = json.loads(output_file.read_text(encoding="utf-8"))
        add_pet = data["addPet"]
        assert add_pet["body"]["endpoint"] == {"type": "POST", "url": "/pet"}
        assert add_pet["body"]["json"]["name"] == "doggie"
        assert add_pet["auth"] == "api_key"
        assert set(add_pet["code"]) == {
            "shell", "http", "javascript", "javascript--nodejs", "ruby", "python", "java", "go",
        }
        assert add_pet["responses"]["405"] == {
            "meaning": "Method Not Allowed",
            "schema": "None",
            "description": "Invalid input",
        }

        find = data["findPetsByStatus"]
        assert find["parameters"]["status"] == {
            "in": "query",
            "type": "array[string]",
            "required": "true",
            "description": "Status values that need to be considered for filter",
        }

    def test_render_then_parse(self, tmp_path):
        markdown_file = tmp_path / "petstore.md"
        output_file = tmp_path / "petstore.json"
        runner = CliRunner()

        result = runner.invoke(main, ["render", str(FIXTURES / "petstore.yaml"), "-o", str(markdown_file)])
        assert result.exit_code == 0

        result = runner.invoke(main, ["parse", str(markdown_file), "-o", str(output_file)])
        assert result.exit_code == 0

        data = json.loads(output_file.read_text(encoding="utf-8"))
        assert list(data) == ["listPets", "createPets", "showPetById"]
        assert data["createPets"]["callbacks"] == "petCreated: POST {$request.body#/callbackUrl}"
