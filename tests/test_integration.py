"""
Integration Tests

Runs real requests against a live model. Skipped unless --run-llm-tests is given.
"""

import os

import pytest

from agent_os.config import Config
from agent_os.core.planner import Planner
from agent_os.orchestrator import Orchestrator


@pytest.fixture
def live_credentials(monkeypatch):
    """Restore real credentials cleared by the autouse fixture."""
    monkeypatch.setattr(Config, "ANTHROPIC_API_KEY", os.getenv("ANTHROPIC_API_KEY"))
    monkeypatch.setattr(Config, "OPENAI_API_KEY", os.getenv("OPENAI_API_KEY"))
    monkeypatch.setattr(Config, "DEFAULT_LLM_PROVIDER", os.getenv("DEFAULT_LLM_PROVIDER", "anthropic"))
    if not Config.is_configured():
        pytest.skip("No credentials for the default provider")


@pytest.mark.llm
class TestIntegration:
    """Test planning and execution end to end"""

    def test_informational_request_is_single_search(self, live_credentials):
        plan = Planner().plan("What is the capital of France?")
        assert len(plan.steps) == 1
        assert plan.steps[0].agent_id == "research"
        assert plan.steps[0].task_type == "webSearch"

    def test_compound_request_chains_steps(self, live_credentials):
        plan = Planner().plan(
            "Find a highly rated sushi restaurant in Tokyo and put dinner there on my calendar tomorrow at 7pm"
        )
        assert len(plan.steps) >= 2
        assert any("{{steps." in str(step.task_input) for step in plan.steps[1:])

    def test_trip_request_runs(self, live_credentials):
        response = Orchestrator().handle("plan a 2-day trip to Kyoto", diagnose=True)
        assert response["result"]["status"] in ("completed", "failed")
        assert response["result"]["steps"]
