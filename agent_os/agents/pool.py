"""
Agent Pool - maps agent ids to live agents for the step executor.
"""

import logging
from typing import Dict, List, Optional, Type

from ..core.registry import CapabilityRegistry
from .base import Agent
from .dna_maker import DnaMakerAgent
from .guardian import GuardianAgent
from .prompt_agent import PromptAgent
from .prompt_engineer import PromptEngineerAgent

logger = logging.getLogger(__name__)

SPECIALISED_AGENTS: Dict[str, Type[Agent]] = {
    "dna": DnaMakerAgent,
}


class AgentPool:
    """
    Agent id -> agent.

    Agents only need an ``execute_task(task)`` method.
    """

    def __init__(self, agents: Optional[Dict[str, object]] = None):
        self._agents: Dict[str, object] = dict(agents or {})

    @classmethod
    def from_registry(cls, registry: Optional[CapabilityRegistry] = None, llm=None) -> "AgentPool":
        """
        One agent per catalog entry plus the prompt engineer and guardian.

        Entries without a specialised class are served by PromptAgent.
        """
        registry = registry or CapabilityRegistry.default()
        pool = cls()
        for entry in registry.list_capabilities():
            agent_cls = SPECIALISED_AGENTS.get(entry.agent_id)
            if agent_cls is not None:
                pool.register(entry.agent_id, agent_cls(entry, llm))
            else:
                pool.register(entry.agent_id, PromptAgent(entry, llm))
        pool.register("prompt_engineer", PromptEngineerAgent(llm=llm))
        pool.register("guardian", GuardianAgent(llm=llm))
        logger.debug(f"Agent pool ready: {pool.agent_ids()}")
        return pool

    def register(self, agent_id: str, agent: object) -> None:
        if not hasattr(agent, "execute_task"):
            raise TypeError(f"Agent for '{agent_id}' has no execute_task method")
        self._agents[agent_id] = agent

    def get(self, agent_id: str) -> Optional[object]:
        return self._agents.get(agent_id)

    def agent_ids(self) -> List[str]:
        return list(self._agents)

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._agents

    def __len__(self) -> int:
        return len(self._agents)
