"""
Error taxonomy shared by every component.

Low-level errors are logged where they happen; only these classes (with
user-safe messages) cross component boundaries.
"""

from typing import Any, Dict, Optional


class AgentOSError(Exception):
    """Base class for all Agent OS errors."""


class ValidationError(AgentOSError, ValueError):
    """Missing or malformed task fields. Never sent to a backend."""


class MissingInstruction(ValidationError):
    """An AIX document has no PROMPT section."""


class ConfigurationError(AgentOSError, ValueError):
    """Credentials for a backend are missing."""


class ExecutionFailed(AgentOSError):
    """A generative or third-party backend call failed or returned unusable data."""

    default_message = "The backend call failed."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class PlanningFailed(AgentOSError):
    """The structure stage of planning failed. Always recovered by the fallback planner."""


class StepFailed(AgentOSError):
    """A workflow step's agent call failed; remaining steps are aborted."""

    def __init__(
        self,
        step_id: str,
        agent_id: str,
        task_type: str,
        message: str,
        task_input: Optional[Dict[str, Any]] = None,
    ):
        self.step_id = step_id
        self.agent_id = agent_id
        self.task_type = task_type
        self.message = message
        self.task_input = task_input or {}
        super().__init__(f"Step '{step_id}' ({agent_id}.{task_type}) failed: {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Payload for the diagnosis collaborator, plus the failing step id."""
        return {
            "stepId": self.step_id,
            "agentName": self.agent_id,
            "taskType": self.task_type,
            "taskInput": self.task_input,
            "errorMessage": self.message,
        }
