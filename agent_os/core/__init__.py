"""
Core modules for Agent OS

Request -> Planner -> WorkflowPlan -> StepExecutor -> WorkflowResult

1. Registry: static catalog of agents and their tasks (planning context)
2. Planner: refine + structure stages, with a rule-based fallback
3. Executor: runs plan steps in order, resolving placeholders between them
"""

from .registry import CapabilityRegistry, CapabilityEntry, TaskSpec
from .plan import WorkflowPlan, PlanStep
from .resolver import ABSENT, resolve
from .validator import Validator
from .executor import StepExecutor, ExecutionRecord, StepRecord, WorkflowResult
from .fallback import FallbackPlanner
from .planner import Planner

__all__ = [
    "CapabilityRegistry",
    "CapabilityEntry",
    "TaskSpec",
    "WorkflowPlan",
    "PlanStep",
    "ABSENT",
    "resolve",
    "Validator",
    "StepExecutor",
    "ExecutionRecord",
    "StepRecord",
    "WorkflowResult",
    "FallbackPlanner",
    "Planner",
]
