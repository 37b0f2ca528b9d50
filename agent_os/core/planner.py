"""
Planner - turns a natural language request into a Workflow Plan

Two sequential stages:
1. Refine: the prompt engineering agent rewrites the request into a more
   detailed instruction
2. Structure: a single JSON-mode generation, given the capability catalog
   and the output contract, emits the plan

The generated plan is validated against the catalog. If the backend is not
configured, either stage fails, or the plan is invalid, the rule-based
fallback planner answers instead, so ``plan`` never fails.
"""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from ..config import Config
from ..errors import ConfigurationError, PlanningFailed
from .fallback import FallbackPlanner
from .llm_client import extract_json
from .plan import WorkflowPlan
from .registry import CapabilityRegistry
from .validator import Validator

logger = logging.getLogger(__name__)

ORCHESTRATOR_SYSTEM_PROMPT = """You are an expert AI orchestrator for a system of specialised agents.
Turn the user's request into a workflow plan: an ordered list of steps, each calling one task on one agent.

## Available Agents

{capabilities}

## Output Format

Return ONLY a single JSON object with this structure:
{{
  "name": "short name for the workflow",
  "steps": [
    {{"id": "step-1", "agentId": "<agent id>", "taskType": "<task name>", "taskInput": {{...}}}}
  ]
}}

## Rules

1. A single, self-contained informational request (for example a factual question) is exactly ONE step: research.webSearch with the question as "query".
2. A compound or multi-domain request is a chain of steps. Each step is the smallest unit of work for one agent task.
3. Use only the agent ids and task names listed above, and supply every required field in "taskInput".
4. Number step ids sequentially in order: "step-1", "step-2", "step-3", ...
5. When a step needs an earlier step's result, reference it instead of repeating data:
   {{{{steps.<step-id>.output.<path>}}}}, for example {{{{steps.step-1.output.results[0].title}}}}.
   A placeholder may only reference a step that comes EARLIER in the list. Paths follow the
   output shapes listed after "->" above.
6. Steps run strictly in order. There are no branches, conditions or loops.
"""


class Planner:
    """
    Creates workflow plans from natural language requests.
    """

    def __init__(
        self,
        registry: Optional[CapabilityRegistry] = None,
        llm=None,
        refiner=None,
        context: Optional[str] = None,
        fallback: Optional[FallbackPlanner] = None
    ):
        """
        Args:
            registry: Capability catalog (defaults to the built-in catalog)
            llm: Planning backend with ``generate(prompt, system=..., json_mode=...)``.
                Built from Config when omitted and credentials exist.
            refiner: Object with ``refine(prompt, context) -> str`` (defaults to
                a PromptEngineerAgent sharing ``llm``)
            context: Context label for the refine stage
            fallback: Rule-based planner
        """
        self.registry = registry or CapabilityRegistry.default()
        self.context = context or Config.REFINE_CONTEXT
        self.fallback = fallback or FallbackPlanner()
        self.validator = Validator()

        if llm is None and Config.is_configured():
            try:
                from .llm_client import LLMClient
                llm = LLMClient.from_config()
            except ConfigurationError as e:
                logger.warning(f"Planning backend unavailable: {e}")
                llm = None
        self.llm = llm

        if refiner is None and llm is not None:
            from ..agents.prompt_engineer import PromptEngineerAgent
            refiner = PromptEngineerAgent(llm=llm)
        self.refiner = refiner

    @property
    def is_configured(self) -> bool:
        return self.llm is not None

    def plan(self, request: str) -> WorkflowPlan:
        """
        Plan a request. Never raises for backend problems.

        Args:
            request: Natural language request

        Returns:
            A WorkflowPlan (from the backend, or from the fallback planner)
        """
        logger.info(f"Planning request: {request[:100]}")

        if not self.is_configured:
            logger.warning("Planning backend is not configured, using rule-based planner")
            return self.fallback.plan(request)

        try:
            refined = self.refine(request)
            plan = self.structure(refined)
        except PlanningFailed as e:
            logger.warning(f"Planning failed, using rule-based planner: {e}")
            return self.fallback.plan(request)

        logger.info(f"Planned '{plan.name}' with {len(plan.steps)} step(s)")
        return plan

    def refine(self, request: str) -> str:
        """
        Stage 1: expand the request into a detailed instruction.

        Raises:
            PlanningFailed: If the refine call fails or returns something other than text
        """
        if self.refiner is None:
            return request
        try:
            refined = self.refiner.refine(request, self.context)
        except Exception as e:
            logger.error(f"Refine stage failed: {e}", exc_info=True)
            raise PlanningFailed("Refine stage failed") from e
        if not refined:
            return request
        if not isinstance(refined, str):
            logger.error(f"Refine stage returned {type(refined).__name__}, expected text")
            raise PlanningFailed("Refine stage returned no text")
        logger.debug(f"Refined request: {refined[:200]}")
        return refined

    def structure(self, instruction: str) -> WorkflowPlan:
        """
        Stage 2: generate, parse and validate the plan.

        Raises:
            PlanningFailed: On call failure, unparseable JSON, wrong shape
                or a plan that does not match the catalog
        """
        system = self.build_system_prompt()
        try:
            response = self.llm.generate(instruction, system=system, json_mode=True)
        except Exception as e:
            logger.error(f"Structure stage call failed: {e}", exc_info=True)
            raise PlanningFailed("Structure stage call failed") from e

        try:
            plan = WorkflowPlan.from_dict(extract_json(response))
        except (ValueError, TypeError, PydanticValidationError) as e:
            logger.error(f"Planner returned an unusable plan: {e}")
            raise PlanningFailed("Planner returned an unusable plan") from e

        is_valid, error = self.validator.validate_plan(plan, self.registry)
        if not is_valid:
            logger.error(f"Generated plan failed validation: {error}")
            raise PlanningFailed(f"Generated plan failed validation: {error}")

        return plan

    def build_system_prompt(self) -> str:
        return ORCHESTRATOR_SYSTEM_PROMPT.format(capabilities=self.registry.describe())

    def fallback_plan(self, request: str) -> WorkflowPlan:
        """Plan with the rule-based planner only."""
        return self.fallback.plan(request)
