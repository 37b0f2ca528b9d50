"""
Tests for the command line interface
"""

import json

from typer.testing import CliRunner

from main import app

runner = CliRunner()


class TestCLI:
    """Test CLI commands that need no backend"""

    def test_plan_fallback_only(self):
        result = runner.invoke(app, ["plan", "What is the capital of France?", "--fallback-only"])
        assert result.exit_code == 0
        assert "Simple Web Search" in result.output
        assert "webSearch" in result.output

    def test_plan_without_credentials_uses_rule_based_planner(self):
        result = runner.invoke(app, ["plan", "plan a trip to Paris"])
        assert result.exit_code == 0
        assert "Trip Planning" in result.output

    def test_schema_uses_wire_names(self):
        result = runner.invoke(app, ["schema"])
        assert result.exit_code == 0
        assert "agentId" in result.output
        assert "taskInput" in result.output

    def test_agents(self):
        result = runner.invoke(app, ["agents"])
        assert result.exit_code == 0
        assert "research" in result.output
        assert "createEvent" in result.output

    def test_info(self):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "Agent OS" in result.output
        assert "No credentials" in result.output

    def test_run_failure_exits_nonzero(self):
        result = runner.invoke(app, ["run", "What is the capital of France?", "--json"])
        assert result.exit_code == 1
        assert "failed" in result.output

    def test_aix_missing_prompt(self, tmp_path):
        path = tmp_path / "bad.aix"
        path.write_text("[RULES]\nbe brief\n", encoding="utf-8")
        result = runner.invoke(app, ["aix", str(path)])
        assert result.exit_code == 1
        assert "MissingInstruction" in result.output

    def test_aix_unreadable_file(self, tmp_path):
        result = runner.invoke(app, ["aix", str(tmp_path / "missing.aix")])
        assert result.exit_code == 1
        assert "cannot read" in result.output
