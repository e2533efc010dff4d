"""
Tests for the command line interface.
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from miniserde_derive.cli_utils import PROGRAM_NAME, reconstruct_command_line
from miniserde_derive.miniserde_derive import miniserde_derive

DOCUMENT = {
    "module": "app.models",
    "declarations": [
        {
            "kind": "struct",
            "name": "User",
            "fields": [
                {"name": "user_id", "type": "int", "attributes": ['serde(rename = "userId")']},
                {"name": "name", "type": "str"},
            ],
        }
    ],
}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def declarations(tmp_path):
    path = tmp_path / "models.json"
    path.write_text(json.dumps(DOCUMENT))
    return path


class TestMiniserdeDerive:
    def test_writes_output(self, runner, declarations, tmp_path):
        output = tmp_path / "models_serde.py"
        result = runner.invoke(miniserde_derive, [str(declarations), str(output)])

        assert result.exit_code == 0, result.output
        code = output.read_text()
        assert code.startswith("# Generated by miniserde_derive v")
        assert "miniserde_derive models.json models_serde.py" in code.splitlines()[0]
        assert "from app.models import User" in code
        assert 'return "userId", self.data.user_id' in code
        assert "@_de.impl(User)" in code

    def test_refuses_to_overwrite(self, runner, declarations, tmp_path):
        output = tmp_path / "models_serde.py"
        output.write_text("keep me")

        result = runner.invoke(miniserde_derive, [str(declarations), str(output)])
        assert result.exit_code != 0
        assert "already exists" in result.output
        assert output.read_text() == "keep me"

        result = runner.invoke(miniserde_derive, ["--force", str(declarations), str(output)])
        assert result.exit_code == 0, result.output
        assert output.read_text() != "keep me"

    def test_reports_derive_errors(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"declarations": [{"kind": "enum", "name": "E", "generics": ["T"]}]}))
        output = tmp_path / "out.py"

        result = runner.invoke(miniserde_derive, [str(path), str(output)])
        assert result.exit_code != 0
        assert "#/declarations/0: error: Enums with generics are not supported" in result.output
        assert not output.exists()

    def test_reports_invalid_json(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{")

        result = runner.invoke(miniserde_derive, [str(path), str(tmp_path / "out.py")])
        assert result.exit_code != 0
        assert "invalid JSON" in result.output

    def test_flags_override_config(self, runner, declarations, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"derive_serialize": True, "attribute_marker": "wire"}))
        output = tmp_path / "out.py"

        result = runner.invoke(
            miniserde_derive,
            ["--config", str(config), "--no-serialize", "--module", "other.models", str(declarations), str(output)],
        )

        assert result.exit_code == 0, result.output
        code = output.read_text()
        assert "_ser.begin.register" not in code
        assert "from other.models import User" in code
        # the marker comes from the config file, so the rename is not applied
        assert 'if k == "user_id":' in code
        assert "--no-serialize" in code.splitlines()[0]


class TestCliUtils:
    def test_reconstruct_command_line_without_context(self):
        assert reconstruct_command_line(miniserde_derive) == PROGRAM_NAME


if __name__ == "__main__":
    pytest.main([__file__])
