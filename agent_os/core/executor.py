"""
Executor - Runs Workflow Plans

Executes a workflow plan step by step:
1. Resolve placeholders in the step's input from earlier outputs
2. Dispatch the resolved input to the step's agent
3. Record the output (or error) under the step id
4. Stop at the first failing step (fail-fast)

The execution record is local to one run and never shared.
"""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Any, Iterator, List, Literal, Optional, Protocol

from ..errors import AgentOSError, ExecutionFailed, StepFailed
from .plan import PlanStep, WorkflowPlan
from .registry import CapabilityRegistry
from .resolver import resolve
from .validator import Validator

logger = logging.getLogger(__name__)


class TaskAgent(Protocol):
    def execute_task(self, task: Dict[str, Any]) -> Any: ...


class AgentLookup(Protocol):
    def get(self, agent_id: str) -> Optional[TaskAgent]: ...


@dataclass
class StepRecord:
    """Result of executing a single step."""
    step_id: str
    agent_id: str
    task_type: str
    status: Literal["success", "error"]
    output: Any = None
    error: Optional[str] = None
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stepId": self.step_id,
            "agentId": self.agent_id,
            "taskType": self.task_type,
            "status": self.status,
            "output": self.output,
            "error": self.error,
            "durationMs": self.duration_ms,
        }


class ExecutionRecord:
    """
    Ordered, append-only mapping of step id -> StepRecord for one run.
    """

    def __init__(self):
        self._records: "OrderedDict[str, StepRecord]" = OrderedDict()

    def add(self, record: StepRecord) -> None:
        if record.step_id in self._records:
            raise ValueError(f"Step '{record.step_id}' already recorded")
        self._records[record.step_id] = record

    def get(self, step_id: str) -> Optional[StepRecord]:
        return self._records.get(step_id)

    def outputs(self) -> Dict[str, Any]:
        """Outputs of successful steps, in execution order."""
        return OrderedDict(
            (step_id, rec.output) for step_id, rec in self._records.items() if rec.success
        )

    def records(self) -> List[StepRecord]:
        return list(self._records.values())

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)


@dataclass
class WorkflowResult:
    """Result of executing a complete plan."""
    plan: WorkflowPlan
    status: Literal["completed", "failed"]
    record: ExecutionRecord
    error: Optional[StepFailed] = None
    duration_ms: int = 0

    @property
    def outputs(self) -> Dict[str, Any]:
        return self.record.outputs()

    @property
    def success(self) -> bool:
        return self.status == "completed"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan": self.plan.name,
            "status": self.status,
            "outputs": dict(self.outputs),
            "steps": [r.to_dict() for r in self.record.records()],
            "error": self.error.to_dict() if self.error else None,
            "durationMs": self.duration_ms,
        }


class StepExecutor:
    """
    Executes workflow plans step by step against live agents.
    """

    def __init__(
        self,
        agents: AgentLookup,
        registry: Optional[CapabilityRegistry] = None
    ):
        """
        Args:
            agents: Agent id -> agent lookup (usually an AgentPool)
            registry: When given, plans are validated against it before running
        """
        self.agents = agents
        self.registry = registry

    def run(self, plan: WorkflowPlan) -> WorkflowResult:
        """
        Execute every step of ``plan`` in order.

        Returns:
            WorkflowResult; on failure ``error`` holds the StepFailed for the
            failing step and no later step has run.

        Raises:
            ValidationError: If a registry was given and the plan does not match it
        """
        if self.registry is not None:
            Validator.ensure_valid_plan(plan, self.registry)

        logger.info(f"Executing plan '{plan.name}' ({len(plan.steps)} steps)")
        start_time = time.monotonic()
        record = ExecutionRecord()

        for step in plan.steps:
            step_record, failure = self._execute_step(step, record)
            record.add(step_record)

            if failure is not None:
                logger.error(f"Aborting plan '{plan.name}': {failure}")
                return WorkflowResult(
                    plan=plan,
                    status="failed",
                    record=record,
                    error=failure,
                    duration_ms=int((time.monotonic() - start_time) * 1000),
                )

        logger.info(f"Plan '{plan.name}' completed")
        return WorkflowResult(
            plan=plan,
            status="completed",
            record=record,
            duration_ms=int((time.monotonic() - start_time) * 1000),
        )

    def _execute_step(self, step: PlanStep, record: ExecutionRecord):
        """Execute a single step. Returns (StepRecord, Optional[StepFailed])."""
        start_time = time.monotonic()
        resolved_input = resolve(step.task_input, record.outputs())

        logger.info(f"Executing {step.id}: {step.agent_id}.{step.task_type}")
        logger.debug(f"Resolved input for {step.id}: {resolved_input}")

        try:
            agent = self.agents.get(step.agent_id)
            if agent is None:
                raise ExecutionFailed(f"No agent registered for '{step.agent_id}'")
            task = dict(resolved_input)
            task["type"] = step.task_type
            output = agent.execute_task(task)
        except (AgentOSError, ValueError) as e:
            message = str(e)
        except Exception:
            logger.exception(f"Step {step.id} raised an unexpected error")
            message = ExecutionFailed.default_message
        else:
            return StepRecord(
                step_id=step.id,
                agent_id=step.agent_id,
                task_type=step.task_type,
                status="success",
                output=output,
                duration_ms=int((time.monotonic() - start_time) * 1000),
            ), None

        failure = StepFailed(
            step_id=step.id,
            agent_id=step.agent_id,
            task_type=step.task_type,
            message=message,
            task_input=resolved_input,
        )
        return StepRecord(
            step_id=step.id,
            agent_id=step.agent_id,
            task_type=step.task_type,
            status="error",
            error=message,
            duration_ms=int((time.monotonic() - start_time) * 1000),
        ), failure
