"""
Prompt Engineering Agent - rewrites a request into a more detailed instruction.

Used by the planner's refine stage.
"""

from typing import Dict, Any, Optional

from ..core.registry import CapabilityEntry, TaskSpec
from .base import Agent

REFINE_SYSTEM_PROMPT = """You are an expert prompt engineer. Rewrite the user's request so that it is more detailed, explicit and structured, which improves the quality of what a generative model produces from it.
- Keep every fact, name, place, date and quantity from the original request.
- Make implicit goals explicit and split compound requests into clearly ordered parts.
- Do not invent requirements the user did not ask for.
- Output ONLY the rewritten request, with no explanation or conversational text."""


class PromptEngineerAgent(Agent):
    """Refines prompts before they reach another model."""

    entry = CapabilityEntry(
        "prompt_engineer",
        "Prompt Engineering Agent",
        "Refines user prompts to improve the quality of AI-generated output.",
        (TaskSpec("refinePrompt", ("prompt",), ("context",), '{"refinedPrompt": string}'),),
    )

    def _run(self, spec: TaskSpec, fields: Dict[str, Any]) -> Dict[str, Any]:
        context = fields.get("context") or "General"
        user_prompt = (
            f"Context: {context}\n\n"
            f"Original Prompt: \"{fields['prompt']}\"\n\n"
            "Rewrite this prompt to be significantly more detailed and effective:"
        )
        refined = self._generate(user_prompt, system=REFINE_SYSTEM_PROMPT).strip()
        return {"refinedPrompt": refined or fields["prompt"]}

    def refine(self, prompt: str, context: Optional[str] = None) -> str:
        """Convenience wrapper returning just the refined text."""
        result = self.execute_task({"type": "refinePrompt", "prompt": prompt, "context": context})
        return result["refinedPrompt"]
