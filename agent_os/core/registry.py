"""
Registry - Capability Catalog

A static description of every agent and the tasks it accepts. The catalog
is planning context: it is serialized into the planner's instruction and
used to validate generated plans. It is loaded once and never mutated.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any, Tuple, Iterable


@dataclass(frozen=True)
class TaskSpec:
    """A task an agent accepts, with the input fields it needs."""
    name: str
    required_fields: Tuple[str, ...] = ()
    optional_fields: Tuple[str, ...] = ()
    returns: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "required_fields": list(self.required_fields),
            "optional_fields": list(self.optional_fields),
            "returns": self.returns,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaskSpec":
        return cls(
            name=data["name"],
            required_fields=tuple(data.get("required_fields", ())),
            optional_fields=tuple(data.get("optional_fields", ())),
            returns=data.get("returns", ""),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class CapabilityEntry:
    """An agent, its display name and the tasks it exposes."""
    agent_id: str
    name: str
    description: str = ""
    tasks: Tuple[TaskSpec, ...] = field(default_factory=tuple)

    def get_task(self, task_type: str) -> Optional[TaskSpec]:
        for task in self.tasks:
            if task.name == task_type:
                return task
        return None

    def task_names(self) -> List[str]:
        return [t.name for t in self.tasks]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent_id": self.agent_id,
            "name": self.name,
            "description": self.description,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CapabilityEntry":
        return cls(
            agent_id=data["agent_id"],
            name=data.get("name", data["agent_id"]),
            description=data.get("description", ""),
            tasks=tuple(TaskSpec.from_dict(t) for t in data.get("tasks", [])),
        )


def _task(name: str, required: Iterable[str] = (), optional: Iterable[str] = (),
          returns: str = "", description: str = "") -> TaskSpec:
    return TaskSpec(name, tuple(required), tuple(optional), returns, description)


TEXT_RESULT = '{"text": string}'

DEFAULT_CAPABILITIES: Tuple[CapabilityEntry, ...] = (
    CapabilityEntry("research", "Research Agent", "Web search and information retrieval.", (
        _task("webSearch", ["query"], [], '{"results": [{"title", "link", "snippet"}]}',
              "Search the web for a query."),
        _task("findHotels", ["location"], ["filters"], '{"results": [{"title", "link", "snippet"}]}'),
        _task("getReviews", ["placeName"], [], '{"results": [{"title", "link", "snippet"}]}'),
        _task("comparePrices", ["itemName"], [], '{"results": [{"title", "link", "snippet"}]}'),
    )),
    CapabilityEntry("travel", "Travel Agent", "Plans trips and finds flights, hotels and local spots.", (
        _task("createItinerary", ["prompt"], [], TEXT_RESULT, "Day-by-day itinerary in Markdown."),
        _task("findFlights", ["origin", "destination"], ["dates"], TEXT_RESULT),
        _task("findHotels", ["location"], ["dates", "criteria"], TEXT_RESULT),
        _task("findPlacesOfInterest", ["location", "placeType"], [], TEXT_RESULT),
        _task("getDirections", ["origin", "destination"], [], TEXT_RESULT),
    )),
    CapabilityEntry("navigator", "Navigator Agent", "Maps, directions and nearby places.", (
        _task("getDirections", ["origin", "destination"], [], TEXT_RESULT),
        _task("findNearby", ["location", "placeType"], [], '{"places": [{"name", "address", "rating"}]}'),
        _task("geocode", ["address"], [], '{"lat": number, "lng": number, "formattedAddress": string}'),
    )),
    CapabilityEntry("scheduler", "Scheduler Agent", "Creates calendar events.", (
        _task("createEvent", ["title", "startTime", "endTime"], ["location", "description"],
              '{"message": string, "structuredEvent": {"title", "startTime", "endTime", "location"}}'),
    )),
    CapabilityEntry("storage", "Storage Agent", "Saves and shares documents.", (
        _task("saveDocument", ["filename", "content"], [], '{"message": string, "fileId": string}'),
        _task("shareFile", ["fileId", "email"], [], '{"message": string}'),
    )),
    CapabilityEntry("translator", "Translator Agent", "Translation and language detection.", (
        _task("translateText", ["text", "targetLang"], ["sourceLang"], '{"translatedText": string}'),
        _task("detectLanguage", ["text"], [], '{"language": string}'),
    )),
    CapabilityEntry("vision", "Vision Agent", "Image analysis and OCR.", (
        _task("analyzeImage", ["imageUrl"], ["prompt"], TEXT_RESULT),
        _task("extractText", ["imageUrl"], [], TEXT_RESULT),
        _task("identifyLandmark", ["imageUrl"], [], '{"landmarks": [{"name", "score"}]}'),
        _task("detectObjects", ["imageUrl"], [], '{"objects": [{"name", "score"}]}'),
    )),
    CapabilityEntry("communicator", "Communicator Agent", "Messaging, email and notifications.", (
        _task("sendTelegramMessage", ["chatId", "message"], [], '{"message": string}'),
        _task("sendEmail", ["to", "subject", "body"], [], '{"message": string}'),
        _task("emailItinerary", ["to", "itinerary"], [], '{"message": string}'),
        _task("sendNotification", ["message"], [], '{"message": string}'),
    )),
    CapabilityEntry("media", "Media Agent", "Video search, image and video generation.", (
        _task("searchVideos", ["query"], [], '{"videos": [{"title", "url"}]}'),
        _task("generateImage", ["prompt"], [], '{"image": string}'),
        _task("summarizeVideo", ["title"], ["description"], TEXT_RESULT),
    )),
    CapabilityEntry("marketing", "Marketing Agent", "Marketing research and copy.", (
        _task("marketResearch", ["prompt"], [], TEXT_RESULT),
        _task("seoSpecialist", ["prompt"], [], TEXT_RESULT),
        _task("contentStrategist", ["prompt"], [], TEXT_RESULT),
        _task("socialMediaManager", ["prompt"], [], TEXT_RESULT),
    )),
    CapabilityEntry("coding", "Coding Agent", "Code generation and review.", (
        _task("generateUI", ["prompt"], ["framework"], '{"code": string}'),
        _task("designAPI", ["prompt"], [], '{"code": string}'),
        _task("writeTests", ["code"], ["framework"], '{"code": string}'),
        _task("reviewCode", ["code"], [], TEXT_RESULT),
    )),
    CapabilityEntry("dna", "DNA Maker Agent", "Creates new agent skills as AIX documents.", (
        _task("createAixSkill", ["description"], [], '{"aix": string, "sections": {"PROMPT", "RULES", "DATA"}}'),
    )),
)


class CapabilityRegistry:
    """
    Read-only catalog of agents and their tasks.

    Provides:
    - Lookup of agents and task specs
    - A text description for the planner's instruction
    - Loading from a JSON file
    """

    def __init__(self, entries: Iterable[CapabilityEntry]):
        entries = tuple(entries)
        index: Dict[str, CapabilityEntry] = {}
        for entry in entries:
            if entry.agent_id in index:
                raise ValueError(f"Duplicate agent id in capability catalog: {entry.agent_id}")
            index[entry.agent_id] = entry
        self._entries = entries
        self._index = index

    @classmethod
    def default(cls) -> "CapabilityRegistry":
        """The built-in catalog."""
        return cls(DEFAULT_CAPABILITIES)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CapabilityRegistry":
        return cls(CapabilityEntry.from_dict(a) for a in data.get("agents", []))

    @classmethod
    def from_file(cls, path: str) -> "CapabilityRegistry":
        """Load a catalog saved with ``to_dict`` (``{"agents": [...]}``)."""
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))

    def list_capabilities(self) -> List[CapabilityEntry]:
        """All entries, in catalog order."""
        return list(self._entries)

    def agent_ids(self) -> List[str]:
        return [e.agent_id for e in self._entries]

    def get(self, agent_id: str) -> Optional[CapabilityEntry]:
        return self._index.get(agent_id)

    def get_task(self, agent_id: str, task_type: str) -> Optional[TaskSpec]:
        entry = self._index.get(agent_id)
        if entry is None:
            return None
        return entry.get_task(task_type)

    def has_task(self, agent_id: str, task_type: str) -> bool:
        return self.get_task(agent_id, task_type) is not None

    def describe(self) -> str:
        """Serialize the catalog as planner context, one block per agent."""
        lines = []
        for entry in self._entries:
            lines.append(f"- **{entry.agent_id}**: {entry.name}. {entry.description}".rstrip())
            for task in entry.tasks:
                fields = ", ".join(task.required_fields) or "none"
                line = f"  - {task.name} (required: {fields}"
                if task.optional_fields:
                    line += f"; optional: {', '.join(task.optional_fields)}"
                line += ")"
                if task.returns:
                    line += f" -> {task.returns}"
                lines.append(line)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {"agents": [e.to_dict() for e in self._entries]}

    def save(self, path: str) -> Path:
        """Write the catalog as JSON (for editing and loading with from_file)."""
        out = Path(path)
        with open(out, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        return out

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._index

    def __len__(self) -> int:
        return len(self._entries)
