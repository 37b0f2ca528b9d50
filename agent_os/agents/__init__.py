"""
Agents - single-purpose task handlers behind a common contract

Every agent exposes ``execute_task({"type": ..., **fields})``, rejects
unknown task types and missing required fields with ValidationError, and
makes exactly one backend call per task.
"""

from .base import Agent
from .prompt_agent import PromptAgent
from .prompt_engineer import PromptEngineerAgent
from .guardian import GuardianAgent, Diagnosis
from .dna_maker import DnaMakerAgent
from .pool import AgentPool

__all__ = [
    "Agent",
    "PromptAgent",
    "PromptEngineerAgent",
    "GuardianAgent",
    "Diagnosis",
    "DnaMakerAgent",
    "AgentPool",
]
