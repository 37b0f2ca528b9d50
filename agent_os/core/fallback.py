"""
Rule-based planner used when the planning backend is unavailable.

Looks for a few keyword patterns and returns a canned plan. It has no
external dependencies and always returns a valid plan.
"""

import logging
import re
from datetime import date, timedelta
from typing import Dict, Optional

from .plan import PlanStep, WorkflowPlan

logger = logging.getLogger(__name__)

TRIP_KEYWORDS = ("plan a trip", "trip to", "travel to", "vacation", "holiday to")

DEFAULT_TRIP_DAYS = 7

_DESTINATION_RE = re.compile(
    r"\b(?:to|in|visit(?:ing)?)\s+(?P<dest>[A-Za-z][A-Za-z .'\-]*?)"
    r"(?=\s+(?:for|on|in|to|next|this|from|with|during|and|by|starting)\b|[,.!?;]|$)",
    re.IGNORECASE,
)
_DAYS_RE = re.compile(r"(?P<days>\d+)\s*-?\s*(?P<unit>days?|nights?|weeks?)\b", re.IGNORECASE)


def extract_trip_details(request: str) -> Dict[str, object]:
    """
    Pull a destination and a day count out of a trip request.

    Returns:
        {"destination": str, "days": int}; destination defaults to
        "the requested location", days to DEFAULT_TRIP_DAYS
    """
    destination = None
    # Prefer the phrase after "trip to"/"travel to" over earlier "to"s.
    for match in _DESTINATION_RE.finditer(request):
        candidate = match.group("dest").strip(" .'-")
        if candidate and candidate.lower() not in ("a", "the", "go", "plan"):
            destination = candidate
            prefix = request[:match.start()].lower()
            if prefix.rstrip().endswith(("trip", "travel", "vacation", "holiday")):
                break

    days = DEFAULT_TRIP_DAYS
    days_match = _DAYS_RE.search(request)
    if days_match:
        days = int(days_match.group("days"))
        if days_match.group("unit").lower().startswith("week"):
            days *= 7
        days = max(days, 1)

    return {"destination": destination or "the requested location", "days": days}


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-") or "trip"


def trip_planning_plan(request: str, today: Optional[date] = None) -> WorkflowPlan:
    """Itinerary -> calendar event -> saved document."""
    details = extract_trip_details(request)
    destination = str(details["destination"])
    days = int(details["days"])
    start = today or date.today()
    end = start + timedelta(days=days)

    return WorkflowPlan(
        name="Trip Planning",
        steps=[
            PlanStep(
                id="step-1",
                agent_id="travel",
                task_type="createItinerary",
                task_input={"prompt": f"Plan a {days}-day trip to {destination}. Original request: {request}"},
            ),
            PlanStep(
                id="step-2",
                agent_id="scheduler",
                task_type="createEvent",
                task_input={
                    "title": f"Trip to {destination}",
                    "startTime": start.isoformat(),
                    "endTime": end.isoformat(),
                    "location": destination,
                    "description": "{{steps.step-1.output.text}}",
                },
            ),
            PlanStep(
                id="step-3",
                agent_id="storage",
                task_type="saveDocument",
                task_input={
                    "filename": f"trip-to-{_slug(destination)}.md",
                    "content": "{{steps.step-1.output.text}}",
                },
            ),
        ],
    )


def simple_search_plan(request: str) -> WorkflowPlan:
    """One web search using the literal request as the query."""
    return WorkflowPlan(
        name="Simple Web Search",
        steps=[
            PlanStep(
                id="step-1",
                agent_id="research",
                task_type="webSearch",
                task_input={"query": request},
            ),
        ],
    )


class FallbackPlanner:
    """Deterministic keyword planner."""

    def plan(self, request: str) -> WorkflowPlan:
        text = (request or "").lower()

        if any(keyword in text for keyword in TRIP_KEYWORDS):
            logger.info("Fallback intent recognized: trip planning")
            return trip_planning_plan(request)

        logger.info("Fallback intent: simple search")
        return simple_search_plan(request or "")
