"""
Workflow Plan - the data structure produced by planning.

A named, ordered list of steps. Each step names an agent, a task and an
input object whose string values may hold placeholders such as
``{{steps.step-1.output.results[0].name}}``. Steps run strictly in list
order; a step can only reference steps that come before it.

The JSON wire shape uses camelCase keys:

    {"name": "...", "steps": [{"id", "agentId", "taskType", "taskInput"}]}
"""

import json
from typing import Dict, Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlanStep(BaseModel):
    """A single step in a workflow plan."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Unique step id, e.g. 'step-1'")
    agent_id: str = Field(..., alias="agentId", min_length=1, description="Agent to invoke, e.g. 'travel'")
    task_type: str = Field(..., alias="taskType", min_length=1, description="Task name on that agent")
    task_input: Dict[str, Any] = Field(
        default_factory=dict,
        alias="taskInput",
        description="Task fields; string values may contain placeholders"
    )


class WorkflowPlan(BaseModel):
    """Complete workflow plan for a request."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Short human-readable plan name")
    steps: List[PlanStep] = Field(default_factory=list, description="Ordered list of steps")

    @model_validator(mode="after")
    def _unique_step_ids(self) -> "WorkflowPlan":
        seen = set()
        for step in self.steps:
            if step.id in seen:
                raise ValueError(f"Duplicate step id: {step.id}")
            seen.add(step.id)
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkflowPlan":
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, text: str) -> "WorkflowPlan":
        return cls.model_validate_json(text)

    def to_dict(self) -> Dict[str, Any]:
        """Wire-shape dictionary (camelCase keys)."""
        return self.model_dump(by_alias=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def step_ids(self) -> List[str]:
        return [s.id for s in self.steps]

    def get_step(self, step_id: str) -> Optional[PlanStep]:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def __str__(self) -> str:
        """Human-readable plan representation."""
        lines = [f"Workflow Plan: {self.name}", "=" * 60]
        for step in self.steps:
            lines.append(f"{step.id}: {step.agent_id}.{step.task_type}")
            for key, value in step.task_input.items():
                lines.append(f"  {key}: {value}")
        return "\n".join(lines)


def plan_json_schema() -> Dict[str, Any]:
    """JSON schema of the wire shape, for authors of hand-written plan files."""
    return WorkflowPlan.model_json_schema(by_alias=True)
