"""
Guardian Agent - diagnoses failed workflow steps.

Given the failing agent, task, input and error message, returns a
diagnosis, a suggestion and optionally a corrected input. It never re-runs
anything; callers decide whether to retry.
"""

import json
import logging
from typing import Dict, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from ..core.llm_client import extract_json
from ..core.registry import CapabilityEntry, TaskSpec
from ..errors import ExecutionFailed, StepFailed, ValidationError
from .base import Agent

logger = logging.getLogger(__name__)

GUARDIAN_SYSTEM_PROMPT = """You are the Guardian Agent, an expert debugger for a multi-agent system.
Analyze a failed task record and return a single JSON object with:
- "diagnosis": a concise, technical explanation of the root cause
- "suggestion": a clear, user-friendly suggestion for fixing the issue
- "retryInput": optional corrected version of the original task input, only when an automated fix is clear
Do not add any commentary outside the JSON object."""


class Diagnosis(BaseModel):
    """Diagnosis of a failed task."""
    model_config = ConfigDict(populate_by_name=True)

    diagnosis: str = Field(..., description="Root cause of the failure")
    suggestion: str = Field(..., description="How to fix the input or the request")
    retry_input: Optional[Dict[str, Any]] = Field(
        None, alias="retryInput", description="Corrected task input, if one is obvious"
    )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class GuardianAgent(Agent):
    """Self-healing collaborator for failed steps."""

    entry = CapabilityEntry(
        "guardian",
        "Guardian Agent",
        "Analyzes and debugs failed agent tasks.",
        (TaskSpec("diagnoseFailure", ("failedTask",), (), '{"diagnosis", "suggestion", "retryInput"}'),),
    )

    def _run(self, spec: TaskSpec, fields: Dict[str, Any]) -> Dict[str, Any]:
        failed = fields["failedTask"]
        if not isinstance(failed, dict):
            raise ValidationError("failedTask must be an object")

        user_prompt = (
            "Analyze the following failed task and provide a diagnosis and suggestion.\n\n"
            f"- Agent Name: {failed.get('agentName')}\n"
            f"- Task Type: {failed.get('taskType')}\n"
            f"- Original Input: {json.dumps(failed.get('taskInput', {}), indent=2, default=str)}\n"
            f"- Error Message: {failed.get('errorMessage')}"
        )
        reply = self._generate(user_prompt, system=GUARDIAN_SYSTEM_PROMPT, json_mode=True)

        try:
            diagnosis = Diagnosis.model_validate(extract_json(reply))
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"[{self.name}] Unusable diagnosis response: {e}")
            raise ExecutionFailed("Guardian Agent failed to analyze the error.") from e

        logger.info(f"[{self.name}] Diagnosis: {diagnosis.diagnosis}")
        return diagnosis.to_dict()

    def diagnose(self, failure: Union[StepFailed, Dict[str, Any]]) -> Diagnosis:
        """
        Diagnose a failure.

        Args:
            failure: A StepFailed or a ``{agentName, taskType, taskInput, errorMessage}`` dict
        """
        failed_task = failure.to_dict() if isinstance(failure, StepFailed) else dict(failure)
        result = self.execute_task({"type": "diagnoseFailure", "failedTask": failed_task})
        return Diagnosis.model_validate(result)
