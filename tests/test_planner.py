"""
Tests for planning: the two-stage planner and the rule-based fallback
"""

import json
from datetime import date

from agent_os.core.fallback import (
    DEFAULT_TRIP_DAYS,
    FallbackPlanner,
    extract_trip_details,
    trip_planning_plan,
)
from agent_os.core.planner import Planner
from agent_os.core.resolver import find_placeholders
from agent_os.core.validator import Validator

GENERATED_PLAN = {
    "name": "Sushi Dinner",
    "steps": [
        {"id": "step-1", "agentId": "research", "taskType": "webSearch",
         "taskInput": {"query": "best sushi in Tokyo"}},
        {"id": "step-2", "agentId": "navigator", "taskType": "getDirections",
         "taskInput": {"origin": "Shinjuku", "destination": "{{steps.step-1.output.results[0].title}}"}},
    ],
}


class TestFallbackPlanner:
    """Test the deterministic keyword planner"""

    def test_informational_request_is_single_search(self, registry):
        request = "What is the capital of France?"
        plan = FallbackPlanner().plan(request)

        assert plan.name == "Simple Web Search"
        assert len(plan.steps) == 1
        step = plan.steps[0]
        assert (step.agent_id, step.task_type) == ("research", "webSearch")
        assert step.task_input == {"query": request}
        assert Validator.validate_plan(plan, registry)[0]

    def test_trip_request(self, registry):
        plan = FallbackPlanner().plan("plan a trip to Paris")

        assert plan.name == "Trip Planning"
        assert len(plan.steps) >= 2
        assert (plan.steps[0].agent_id, plan.steps[0].task_type) == ("travel", "createItinerary")
        assert "Paris" in plan.steps[0].task_input["prompt"]
        assert ("step-1", ".text") in list(find_placeholders(plan.steps[1].task_input))
        assert Validator.validate_plan(plan, registry) == (True, None)

    def test_trip_keywords(self):
        for request in ["I want to travel to Rome", "Book me a vacation in Bali", "holiday to Crete please"]:
            assert FallbackPlanner().plan(request).name == "Trip Planning"

    def test_extract_trip_details(self):
        assert extract_trip_details("plan a trip to Paris") == {"destination": "Paris", "days": DEFAULT_TRIP_DAYS}
        assert extract_trip_details("Plan a 5-day trip to Tokyo next month") == {"destination": "Tokyo", "days": 5}
        assert extract_trip_details("2 weeks vacation in Lisbon") == {"destination": "Lisbon", "days": 14}
        assert extract_trip_details("I want to travel to Rome for 3 days") == {"destination": "Rome", "days": 3}

    def test_extract_trip_details_defaults(self):
        details = extract_trip_details("plan a trip")
        assert details["destination"] == "the requested location"
        assert details["days"] == DEFAULT_TRIP_DAYS

    def test_trip_dates_and_document(self):
        plan = trip_planning_plan("plan a 3 day trip to New York", today=date(2026, 10, 19))
        event = plan.steps[1].task_input
        assert event["startTime"] == "2026-10-19"
        assert event["endTime"] == "2026-10-22"
        assert event["location"] == "New York"
        assert plan.steps[2].task_input["filename"] == "trip-to-new-york.md"

    def test_empty_request(self):
        plan = FallbackPlanner().plan("")
        assert plan.name == "Simple Web Search"


class TestPlanner:
    """Test the refine -> structure planner"""

    def test_unconfigured_uses_fallback(self):
        planner = Planner()
        assert not planner.is_configured
        assert planner.plan("What is the capital of France?").name == "Simple Web Search"

    def test_refine_then_structure(self, make_llm):
        llm = make_llm("Find highly rated sushi restaurants in Tokyo and directions.",
                       json.dumps(GENERATED_PLAN))
        plan = Planner(llm=llm).plan("sushi in tokyo and how to get there")

        assert plan.name == "Sushi Dinner"
        assert plan.step_ids() == ["step-1", "step-2"]
        assert len(llm.calls) == 2

        refine_call, structure_call = llm.calls
        assert "sushi in tokyo and how to get there" in refine_call["prompt"]
        assert structure_call["prompt"] == "Find highly rated sushi restaurants in Tokyo and directions."
        assert structure_call["json_mode"] is True
        assert "- **navigator**:" in structure_call["system"]
        assert "You are an expert AI orchestrator" in structure_call["system"]

    def test_fenced_plan_accepted(self, make_llm):
        llm = make_llm("refined", "```json\n" + json.dumps(GENERATED_PLAN) + "\n```")
        assert Planner(llm=llm).plan("x").name == "Sushi Dinner"

    def test_structure_call_failure_falls_back(self, make_llm):
        llm = make_llm("refined", RuntimeError("HTTP 503"))
        plan = Planner(llm=llm).plan("plan a trip to Paris")
        assert plan.name == "Trip Planning"

    def test_unparseable_plan_falls_back(self, make_llm):
        llm = make_llm("refined", "Sorry, I cannot help with that.")
        plan = Planner(llm=llm).plan("What is the capital of France?")
        assert plan.name == "Simple Web Search"

    def test_wrong_shape_falls_back(self, make_llm):
        llm = make_llm("refined", json.dumps({"name": "x", "steps": [{"id": "step-1"}]}))
        assert Planner(llm=llm).plan("What is 2+2?").name == "Simple Web Search"

    def test_invalid_plan_falls_back(self, make_llm):
        bad = {"name": "x", "steps": [{"id": "step-1", "agentId": "oracle", "taskType": "predict", "taskInput": {}}]}
        llm = make_llm("refined", json.dumps(bad))
        assert Planner(llm=llm).plan("What is 2+2?").name == "Simple Web Search"

    def test_forward_reference_falls_back(self, make_llm):
        bad = {"name": "x", "steps": [
            {"id": "step-1", "agentId": "research", "taskType": "webSearch",
             "taskInput": {"query": "{{steps.step-2.output.text}}"}},
            {"id": "step-2", "agentId": "research", "taskType": "webSearch", "taskInput": {"query": "q"}},
        ]}
        llm = make_llm("refined", json.dumps(bad))
        assert Planner(llm=llm).plan("What is 2+2?").name == "Simple Web Search"

    def test_non_sequential_ids_fall_back(self, make_llm):
        bad = {"name": "x", "steps": [
            {"id": "search", "agentId": "research", "taskType": "webSearch", "taskInput": {"query": "sushi"}},
            {"id": "step-1", "agentId": "navigator", "taskType": "getDirections",
             "taskInput": {"origin": "Shinjuku", "destination": "{{steps.search.output.results[0].title}}"}},
        ]}
        llm = make_llm("refined", json.dumps(bad))
        plan = Planner(llm=llm).plan("sushi and directions")

        assert plan.name == "Simple Web Search"
        assert plan.step_ids() == ["step-1"]

    def test_refiner_returning_nothing_uses_request(self, make_llm):
        class SilentRefiner:
            def refine(self, prompt, context):
                return None

        llm = make_llm(json.dumps(GENERATED_PLAN))
        plan = Planner(llm=llm, refiner=SilentRefiner()).plan("hello")

        assert plan.name == "Sushi Dinner"
        assert llm.calls[0]["prompt"] == "hello"

    def test_refiner_returning_non_text_falls_back(self, make_llm):
        class BrokenRefiner:
            def refine(self, prompt, context):
                return {"refinedPrompt": prompt}

        llm = make_llm()
        plan = Planner(llm=llm, refiner=BrokenRefiner()).plan("hello")

        assert plan.name == "Simple Web Search"
        assert llm.calls == []

    def test_refine_failure_falls_back(self, make_llm):
        llm = make_llm(RuntimeError("timeout"))
        plan = Planner(llm=llm).plan("What is the capital of France?")

        assert plan.name == "Simple Web Search"
        assert len(llm.calls) == 1

    def test_custom_refiner(self, make_llm):
        class Refiner:
            def refine(self, prompt, context):
                return f"[{context}] {prompt}"

        llm = make_llm(json.dumps(GENERATED_PLAN))
        planner = Planner(llm=llm, refiner=Refiner(), context="Travel")
        planner.plan("sushi")
        assert llm.calls[0]["prompt"] == "[Travel] sushi"

    def test_fallback_plan(self, make_llm):
        planner = Planner(llm=make_llm())
        assert planner.fallback_plan("trip to Oslo").name == "Trip Planning"
