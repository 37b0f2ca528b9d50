"""
DNA Maker Agent - generates new agent skills as AIX documents.
"""

import logging
from typing import Dict, Any

from ..aix import parse
from ..core.registry import CapabilityRegistry, TaskSpec
from ..errors import ExecutionFailed
from .base import Agent

logger = logging.getLogger(__name__)

DNA_SYSTEM_PROMPT = """You are an AI agent architect specializing in the .aix file format.
Generate the complete text of an .aix file for the skill the user describes.
The file must contain these sections, each starting with its header on its own line:

[PROMPT]
A clear system prompt instructing another AI how to perform the skill.
[RULES]
Specific rules and constraints: output format, what to do and what not to do.
[DATA]
Example data or a schema for the data the skill works with (JSON, CSV or plain text).

Output ONLY the raw .aix text starting with [PROMPT]. No markdown code fences, no commentary."""


class DnaMakerAgent(Agent):
    """Creates AIX skill documents from a description."""

    entry = CapabilityRegistry.default().get("dna")

    def _run(self, spec: TaskSpec, fields: Dict[str, Any]) -> Dict[str, Any]:
        user_prompt = f"Generate an .aix file for the following skill description:\n\n\"{fields['description']}\""
        text = self._generate(user_prompt, system=DNA_SYSTEM_PROMPT).strip()

        if text.startswith("```"):
            text = text.split("\n", 1)[1] if "\n" in text else ""
            text = text.rsplit("```", 1)[0].strip()

        document = parse(text)
        if not document.is_executable():
            logger.error(f"[{self.name}] Generated document has no PROMPT section: {text[:200]}")
            raise ExecutionFailed("Failed to generate a valid AIX document.")

        return {"aix": text, "sections": document.to_dict()}
