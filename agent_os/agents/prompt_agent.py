"""
Generic prompt-template agent.

Serves any capability entry: the task name and fields are formatted into a
prompt, the model is asked for JSON in the task's declared return shape,
and the reply is parsed (plain text falls back to ``{"text": ...}``).
"""

import json
from typing import Dict, Any, Optional

from ..core.llm_client import extract_json
from ..core.registry import CapabilityEntry, TaskSpec
from .base import Agent


class PromptAgent(Agent):
    """Wraps one capability entry over a generative model."""

    def __init__(self, entry: CapabilityEntry, llm=None, system_prompt: Optional[str] = None):
        super().__init__(entry, llm)
        self.system_prompt = system_prompt

    def build_system_prompt(self, spec: TaskSpec) -> str:
        parts = [self.system_prompt or f"You are the {self.entry.name}. {self.entry.description}".strip()]
        parts.append(f"Complete the '{spec.name}' task using the inputs provided.")
        if spec.description:
            parts.append(spec.description)
        if spec.returns:
            parts.append(f"Respond with a single JSON object shaped like: {spec.returns}")
        return "\n".join(parts)

    def build_prompt(self, spec: TaskSpec, fields: Dict[str, Any]) -> str:
        lines = [f"Task: {spec.name}", "Inputs:"]
        for key, value in fields.items():
            if not isinstance(value, str):
                value = json.dumps(value, default=str)
            lines.append(f"- {key}: {value}")
        return "\n".join(lines)

    def _run(self, spec: TaskSpec, fields: Dict[str, Any]) -> Any:
        reply = self._generate(
            self.build_prompt(spec, fields),
            system=self.build_system_prompt(spec),
            json_mode=bool(spec.returns),
        )
        return parse_reply(reply)


def parse_reply(reply: str) -> Any:
    """JSON-looking replies are parsed; anything else is wrapped as text."""
    text = (reply or "").strip()
    if text.startswith("{") or text.startswith("[") or text.startswith("```"):
        try:
            return extract_json(text)
        except ValueError:
            pass
    return {"text": text}
