"""
Agent OS - natural language orchestration for single-purpose AI agents

A free-form request is planned into an ordered workflow of agent tasks,
then executed step by step with earlier outputs feeding later inputs.
Standalone tasks can also be described as AIX documents.
"""

__version__ = "0.1.0"
