"""
AIX task execution: one document, one generative call.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..errors import ConfigurationError, ExecutionFailed, MissingInstruction
from .parser import AixDocument, parse_file

logger = logging.getLogger(__name__)

EXECUTOR_SYSTEM_PROMPT = (
    "You are an AI task executor. Follow the instructions in the PROMPT section, "
    "use the DATA provided and obey the RULES. Return only the requested output, "
    "with no extra commentary."
)


@dataclass
class AixResult:
    """Outcome of executing an AIX document."""
    success: bool
    output: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "output": self.output,
            "error": self.error,
            "error_code": self.error_code,
        }


def build_instruction(document: AixDocument) -> str:
    """Combine PROMPT, DATA and RULES into a single instruction."""
    return (
        "PROMPT (your main objective):\n"
        f"{document.prompt}\n\n"
        "DATA (the information to process):\n"
        f"{document.data or '(none)'}\n\n"
        "RULES (constraints to apply):\n"
        f"{document.rules or '(none)'}\n\n"
        "Provide the final output based on these instructions."
    )


class AixExecutor:
    """
    Sends a parsed AIX document to the model and returns its raw text.

    No retries. Backend errors are logged and reported as a generic failure.
    """

    def __init__(self, llm=None):
        """
        Args:
            llm: Object with ``generate(prompt, system=...)``; built from Config when omitted
        """
        self._llm = llm

    def _client(self):
        if self._llm is None:
            from ..core.llm_client import LLMClient
            self._llm = LLMClient.from_config()
        return self._llm

    def execute(self, document: AixDocument) -> AixResult:
        """
        Execute a document.

        Returns:
            AixResult with the model output, or an error code of
            ``MissingInstruction``, ``ConfigurationError`` or ``ExecutionFailed``
        """
        if not document.is_executable():
            error = MissingInstruction("The AIX document has no PROMPT section.")
            return AixResult(success=False, error=str(error), error_code="MissingInstruction")

        try:
            llm = self._client()
        except ConfigurationError as e:
            logger.error(f"AIX executor is not configured: {e}")
            return AixResult(success=False, error=str(e), error_code="ConfigurationError")

        try:
            output = llm.generate(build_instruction(document), system=EXECUTOR_SYSTEM_PROMPT)
        except Exception as e:
            logger.error(f"Error executing AIX task: {e}", exc_info=True)
            error = ExecutionFailed("Failed to get a response from the model.")
            return AixResult(success=False, error=str(error), error_code="ExecutionFailed")

        return AixResult(success=True, output=output)

    def execute_file(self, path: str) -> AixResult:
        """Parse and execute an .aix file."""
        return self.execute(parse_file(path))
