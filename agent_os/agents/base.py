"""
Base agent: task dispatch, input validation and backend error containment.
"""

import logging
from typing import Dict, Any, Optional

from ..core.registry import CapabilityEntry, TaskSpec
from ..core.validator import Validator
from ..errors import ExecutionFailed, ValidationError

logger = logging.getLogger(__name__)


class Agent:
    """
    An agent described by a capability entry.

    Subclasses implement ``_run``; ``execute_task`` handles validation.
    """

    entry: CapabilityEntry = CapabilityEntry("agent", "Agent")

    def __init__(self, entry: Optional[CapabilityEntry] = None, llm=None):
        """
        Args:
            entry: Capability entry (defaults to the class-level entry)
            llm: Object with ``generate(prompt, system=..., json_mode=...)``;
                built from Config on first use when omitted
        """
        if entry is not None:
            self.entry = entry
        self._llm = llm

    @property
    def agent_id(self) -> str:
        return self.entry.agent_id

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def llm(self):
        """The LLM client. Raises ConfigurationError when credentials are missing."""
        if self._llm is None:
            from ..core.llm_client import LLMClient
            self._llm = LLMClient.from_config()
        return self._llm

    def execute_task(self, task: Dict[str, Any]) -> Any:
        """
        Run a task.

        Args:
            task: ``{"type": <task name>, **fields}``

        Raises:
            ValidationError: Unknown task type or missing required field
            ConfigurationError: No credentials for the backend
            ExecutionFailed: The backend call failed
        """
        task_type = task.get("type")
        spec = self.entry.get_task(task_type) if isinstance(task_type, str) else None
        if spec is None:
            raise ValidationError(f"Unknown task type for {self.name}: {task_type}")

        is_valid, error = Validator.validate_task_input(task, spec)
        if not is_valid:
            raise ValidationError(error)

        logger.info(f"[{self.name}] Executing task: {task_type}")
        fields = {k: v for k, v in task.items() if k != "type"}
        return self._run(spec, fields)

    def _run(self, spec: TaskSpec, fields: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def _generate(self, prompt: str, system: Optional[str] = None, json_mode: bool = False) -> str:
        """One model call; backend errors become ExecutionFailed."""
        llm = self.llm
        try:
            return llm.generate(prompt, system=system, json_mode=json_mode)
        except Exception as e:
            logger.error(f"[{self.name}] Model call failed: {e}", exc_info=True)
            raise ExecutionFailed(f"{self.name} failed to get a response from the model.") from e

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.agent_id}>"
