"""
AIX document parsing.

Headers are lines of the form ``[NAME]`` (surrounding whitespace allowed),
where NAME is a word of letters, digits and underscores starting with a
letter, matched case-insensitively. Bracketed lines such as ``[1, 2, 3]``
are body text. Text up to the next header belongs to the
section; text under unknown headers, and text before the first header, is
dropped. Parsing never fails.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

SECTION_NAMES: Tuple[str, ...] = ("PROMPT", "RULES", "DATA", "PYTHON")

_HEADER_RE = re.compile(r"\[\s*(?P<name>[A-Za-z][A-Za-z0-9_]*)\s*\]")


@dataclass
class AixDocument:
    """The four recognized sections of an AIX document."""
    prompt: str = ""
    rules: str = ""
    data: str = ""
    python: str = ""

    def __getitem__(self, section: str) -> str:
        key = section.upper()
        if key not in SECTION_NAMES:
            raise KeyError(section)
        return getattr(self, key.lower())

    def get(self, section: str, default: str = "") -> str:
        try:
            return self[section]
        except KeyError:
            return default

    def to_dict(self) -> Dict[str, str]:
        """Sections keyed by uppercase name."""
        return {name: getattr(self, name.lower()) for name in SECTION_NAMES}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "AixDocument":
        sections = {k.upper(): v for k, v in data.items()}
        return cls(**{name.lower(): sections.get(name, "") or "" for name in SECTION_NAMES})

    def is_executable(self) -> bool:
        """A document needs a non-empty PROMPT to be executed."""
        return bool(self.prompt.strip())

    def data_json(self) -> Optional[Any]:
        """DATA parsed as JSON, or None when it is not JSON."""
        if not self.data.strip():
            return None
        try:
            return json.loads(self.data)
        except json.JSONDecodeError:
            return None


def _header_name(line: str) -> Optional[str]:
    match = _HEADER_RE.fullmatch(line.strip())
    if match is None:
        return None
    return match.group("name").upper()


def _trim_blank_lines(lines: List[str]) -> str:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])


def parse(text: str) -> AixDocument:
    """
    Parse AIX text into a document.

    Args:
        text: Raw document content

    Returns:
        AixDocument; sections that are absent are empty strings
    """
    collected: Dict[str, List[str]] = {name: [] for name in SECTION_NAMES}
    current: Optional[str] = None

    for line in (text or "").splitlines():
        name = _header_name(line)
        if name is not None:
            current = name if name in collected else None
            continue
        if current is not None:
            collected[current].append(line)

    return AixDocument(**{name.lower(): _trim_blank_lines(lines) for name, lines in collected.items()})


def parse_file(path: str) -> AixDocument:
    """Read and parse an .aix file."""
    with open(Path(path), 'r', encoding='utf-8') as f:
        return parse(f.read())


def serialize(document: AixDocument) -> str:
    """Render a document back to AIX text. Empty PYTHON is omitted."""
    parts = []
    for name in SECTION_NAMES:
        body = document[name]
        if name == "PYTHON" and not body:
            continue
        parts.append(f"[{name}]\n{body}" if body else f"[{name}]")
    return "\n".join(parts) + "\n"
