"""Tests for the slimming CLI commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from promptslim.cli.main import main


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def payload_file(tmp_path: Path, users_payload: str) -> str:
    path = tmp_path / "users.json"
    path.write_text(users_payload)
    return str(path)


class TestJsonCommand:
    """Tests for `promptslim json`."""

    def test_slims_file(self, runner, payload_file):
        """Output is valid, slimmed JSON."""
        result = runner.invoke(main, ["json", payload_file, "--level", "aggressive", "--no-stats"])

        assert result.exit_code == 0
        slimmed = json.loads(result.output)
        assert "metadata" not in slimmed
        assert slimmed["data"][-1] == "... and 24 more similar items"

    def test_reads_stdin(self, runner):
        """Input defaults to stdin."""
        result = runner.invoke(main, ["json", "--no-stats"], input='[{"a": 1}, {"a": 2}]')

        assert result.exit_code == 0
        assert json.loads(result.output) == [{"a": 1}, "... and 1 more similar items"]

    def test_preserve_key_overrides_defaults(self, runner):
        """--preserve-key keeps a noise key on aggressive."""
        result = runner.invoke(
            main,
            ["json", "--level", "aggressive", "--preserve-key", "metadata", "--no-stats"],
            input='{"metadata": 1, "debug": 2}',
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {"metadata": 1}

    def test_max_samples(self, runner):
        """--max-samples bounds kept shapes."""
        data = json.dumps([{"a": 1}, {"b": 1}, {"c": 1}])
        result = runner.invoke(main, ["json", "--max-samples", "1", "--no-stats"], input=data)

        assert json.loads(result.output) == [{"a": 1}, "... and 2 more similar items"]

    def test_invalid_json_exits_with_error(self, runner):
        """Parse errors print the diagnostic and exit 1."""
        result = runner.invoke(main, ["json"], input="{oops")

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_invalid_max_samples(self, runner):
        """Non-positive sample bounds are rejected."""
        result = runner.invoke(main, ["json", "--max-samples", "0"], input="[]")
        assert result.exit_code == 1

    def test_stats_panel(self, runner, payload_file):
        """Statistics are printed unless disabled."""
        result = runner.invoke(main, ["json", payload_file])

        assert result.exit_code == 0
        assert "Reduction" in result.output


class TestLogCommand:
    """Tests for `promptslim log`."""

    def test_filters_log(self, runner, node_error_log):
        """Framework frames are dropped and depth respected."""
        result = runner.invoke(
            main, ["log", "--max-stack-depth", "1", "--no-stats"], input=node_error_log
        )

        assert result.exit_code == 0
        lines = result.output.strip().split("\n")
        assert "at getUser (/app/src/users.js:42:15)" in lines
        assert "... (remaining stack trace truncated)" in lines
        assert not any("node_modules" in line for line in lines)

    def test_preserve_pattern(self, runner):
        """--preserve-pattern keeps matching lines on aggressive."""
        result = runner.invoke(
            main,
            ["log", "--level", "aggressive", "--preserve-pattern", "DEPLOY", "--no-stats"],
            input="noise\nDEPLOY v1.2.3 done\nmore noise",
        )

        assert result.output.strip() == "DEPLOY v1.2.3 done"

    def test_negative_depth_rejected(self, runner):
        """Negative stack depth exits with an error."""
        result = runner.invoke(main, ["log", "--max-stack-depth=-1"], input="x")
        assert result.exit_code == 1


class TestSchemaCommand:
    """Tests for `promptslim schema`."""

    def test_text_summary(self, runner, payload_file):
        """The default output is the text summary."""
        result = runner.invoke(main, ["schema", payload_file, "--no-stats"])

        assert result.exit_code == 0
        assert result.output.startswith("Object with 4 fields:")
        assert "• data: array" in result.output

    def test_json_schema(self, runner):
        """--format json prints the schema structure."""
        result = runner.invoke(
            main, ["schema", "--format", "json", "--no-stats"], input='{"a": 1, "b": 2}'
        )

        schema = json.loads(result.output)
        assert schema["kind"] == "object"
        assert [f["name"] for f in schema["fields"]] == ["a", "b"]

    def test_invalid_json(self, runner):
        """Parse errors exit 1."""
        result = runner.invoke(main, ["schema"], input="nope")
        assert result.exit_code == 1


def test_version(runner):
    """--version reports the package version."""
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "promptslim" in result.output
