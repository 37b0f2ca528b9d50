"""
Orchestrator - single entry point for free-form requests

Plans the request, executes the plan and, when asked, attaches a diagnosis
of the failing step. It never retries a failed step itself.
"""

import logging
from typing import Dict, Any, Optional

from .agents import AgentPool, GuardianAgent
from .config import Config
from .core.executor import StepExecutor, WorkflowResult
from .core.planner import Planner
from .core.registry import CapabilityRegistry
from .errors import AgentOSError

logger = logging.getLogger(__name__)


def load_registry() -> CapabilityRegistry:
    """The catalog from Config.CAPABILITIES_FILE, or the built-in one."""
    if Config.CAPABILITIES_FILE is not None:
        return CapabilityRegistry.from_file(str(Config.CAPABILITIES_FILE))
    return CapabilityRegistry.default()


class Orchestrator:
    """
    Plans and runs requests against the agent pool.
    """

    def __init__(
        self,
        registry: Optional[CapabilityRegistry] = None,
        planner: Optional[Planner] = None,
        agents: Optional[AgentPool] = None,
        guardian: Optional[GuardianAgent] = None,
        llm=None
    ):
        self.registry = registry or load_registry()
        self.planner = planner or Planner(registry=self.registry, llm=llm)
        self.agents = agents or AgentPool.from_registry(self.registry, llm=llm)
        self.executor = StepExecutor(self.agents)
        self.guardian = guardian or self.agents.get("guardian")

    def handle(self, request: str, diagnose: bool = False) -> Dict[str, Any]:
        """
        Plan and execute a request.

        Args:
            request: Natural language request
            diagnose: Ask the guardian agent to analyze a failed step

        Returns:
            {"request", "plan", "result", "diagnosis"?}
        """
        plan = self.planner.plan(request)
        result = self.executor.run(plan)

        response: Dict[str, Any] = {
            "request": request,
            "plan": plan.to_dict(),
            "result": result.to_dict(),
        }

        if diagnose and result.error is not None:
            diagnosis = self.diagnose(result)
            if diagnosis is not None:
                response["diagnosis"] = diagnosis

        return response

    def diagnose(self, result: WorkflowResult) -> Optional[Dict[str, Any]]:
        """Diagnosis of the failed step, or None if unavailable."""
        if result.error is None or self.guardian is None:
            return None
        try:
            return self.guardian.diagnose(result.error).to_dict()
        except AgentOSError as e:
            logger.warning(f"Diagnosis unavailable for step {result.error.step_id}: {e}")
            return None
