"""
Pytest configuration and fixtures for Agent OS tests
"""

import pytest

from agent_os.config import Config
from agent_os.core.registry import CapabilityRegistry


def pytest_addoption(parser):
    """Add command line options"""
    parser.addoption(
        "--run-llm-tests",
        action="store_true",
        default=False,
        help="Run tests that make expensive LLM API calls"
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-llm-tests"):
        return
    skip_llm = pytest.mark.skip(reason="LLM tests are expensive and slow (use --run-llm-tests)")
    for item in items:
        if "llm" in item.keywords:
            item.add_marker(skip_llm)


class FakeLLM:
    """Scripted stand-in for LLMClient. Each call pops the next response."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def generate(self, prompt, system=None, json_mode=False, **kwargs):
        self.calls.append({"prompt": prompt, "system": system, "json_mode": json_mode})
        if not self.responses:
            raise AssertionError("FakeLLM received an unexpected call")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class RecordingAgent:
    """Agent double that records tasks and returns scripted outputs."""

    def __init__(self, outputs=None, error=None):
        self.outputs = outputs or {}
        self.error = error
        self.tasks = []

    def execute_task(self, task):
        self.tasks.append(task)
        if self.error is not None:
            raise self.error
        output = self.outputs.get(task["type"], {"ok": True})
        return output(task) if callable(output) else output


@pytest.fixture(autouse=True)
def no_credentials(monkeypatch):
    """Tests never reach a real backend unless they opt in."""
    monkeypatch.setattr(Config, "ANTHROPIC_API_KEY", None)
    monkeypatch.setattr(Config, "OPENAI_API_KEY", None)
    monkeypatch.setattr(Config, "CAPABILITIES_FILE", None)
    monkeypatch.setattr(Config, "DEFAULT_LLM_PROVIDER", "anthropic")
    monkeypatch.setattr(Config, "DEFAULT_MODEL", None)


@pytest.fixture
def make_llm():
    """Factory for scripted fake LLM clients."""
    return FakeLLM


@pytest.fixture
def registry():
    return CapabilityRegistry.default()
