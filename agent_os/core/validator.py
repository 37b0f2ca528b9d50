"""
Validator - Plan and Task Input Validation

Ensures:
1. Step ids are unique and sequential (step-1, step-2, ...)
2. Every agent/task pair exists in the capability catalog
3. Placeholders only reference earlier steps
4. Required task fields are present
"""

from typing import Dict, Any, Optional, Tuple

from ..errors import ValidationError
from .plan import WorkflowPlan
from .registry import CapabilityRegistry, TaskSpec
from .resolver import find_placeholders


class Validator:
    """
    Validates generated plans and task inputs against the capability catalog.
    """

    @staticmethod
    def validate_plan(plan: WorkflowPlan, registry: CapabilityRegistry) -> Tuple[bool, Optional[str]]:
        """
        Validate a workflow plan.

        Args:
            plan: Plan to check (usually untrusted planner output)
            registry: Capability catalog

        Returns:
            (is_valid, error_message)
        """
        if not plan.steps:
            return False, "Plan has no steps"

        seen = set()
        for position, step in enumerate(plan.steps, start=1):
            if step.id in seen:
                return False, f"Step {step.id}: duplicate step id"
            if step.id != f"step-{position}":
                return False, f"Step {step.id}: expected id 'step-{position}', ids must be sequential"

            entry = registry.get(step.agent_id)
            if entry is None:
                return False, f"Step {step.id}: unknown agent '{step.agent_id}'"
            if entry.get_task(step.task_type) is None:
                return False, f"Step {step.id}: agent '{step.agent_id}' has no task '{step.task_type}'"

            for ref, _path in find_placeholders(step.task_input):
                if ref == step.id:
                    return False, f"Step {step.id}: placeholder references its own output"
                if ref not in seen:
                    return False, f"Step {step.id}: placeholder references '{ref}', which is not an earlier step"

            seen.add(step.id)

        return True, None

    @staticmethod
    def ensure_valid_plan(plan: WorkflowPlan, registry: CapabilityRegistry) -> WorkflowPlan:
        """Return the plan unchanged or raise ValidationError."""
        is_valid, error = Validator.validate_plan(plan, registry)
        if not is_valid:
            raise ValidationError(f"Invalid workflow plan '{plan.name}': {error}")
        return plan

    @staticmethod
    def validate_task_input(task_input: Dict[str, Any], task_spec: TaskSpec) -> Tuple[bool, Optional[str]]:
        """
        Check that every required field has a usable value.

        None and blank strings count as missing.
        """
        for field_name in task_spec.required_fields:
            value = task_input.get(field_name)
            if value is None or (isinstance(value, str) and not value.strip()):
                return False, f"Missing required field '{field_name}' for task '{task_spec.name}'"
        return True, None
