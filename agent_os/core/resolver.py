"""
Placeholder Resolver

Substitutes ``{{steps.<step-id>.output.<path>}}`` expressions in a step's
input with values from earlier steps' recorded outputs.

Lookups are safe navigation over JSON-like values: a missing step, key or
index yields the ``ABSENT`` sentinel instead of raising.
"""

import copy
import json
import re
from typing import Any, Iterator, List, Mapping, Tuple, Union

PLACEHOLDER_RE = re.compile(
    r"\{\{\s*steps\.(?P<step>[A-Za-z0-9_\-]+)\.output(?P<path>(?:\.[^\s.\[\]{}]+|\[[^\]]*\])*)\s*\}\}"
)

_TOKEN_RE = re.compile(
    r"\.(?P<key>[^.\[\]]+)"
    r"|\[\s*(?P<index>-?\d+)\s*\]"
    r"|\[\s*(?P<quote>['\"])(?P<qkey>.*?)(?P=quote)\s*\]"
    r"|\[(?P<bare>[^\]]*)\]"
)

PathToken = Union[str, int]


class _Absent:
    """Marker for a value that could not be resolved."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


ABSENT = _Absent()


def parse_path(path: str) -> List[PathToken]:
    """
    Split an accessor such as ``results[0].name`` into tokens.

    A leading dot is optional. Integer brackets become ints, everything
    else a string key.
    """
    if not path:
        return []
    if not path.startswith(".") and not path.startswith("["):
        path = "." + path

    tokens: List[PathToken] = []
    for match in _TOKEN_RE.finditer(path):
        if match.group("key") is not None:
            tokens.append(match.group("key"))
        elif match.group("index") is not None:
            tokens.append(int(match.group("index")))
        elif match.group("qkey") is not None:
            tokens.append(match.group("qkey"))
        else:
            tokens.append(match.group("bare").strip())
    return tokens


def get_path(value: Any, path: Union[str, List[PathToken]]) -> Any:
    """Follow ``path`` into ``value``; ``ABSENT`` if any hop is missing."""
    tokens = parse_path(path) if isinstance(path, str) else path
    current = value
    for token in tokens:
        if current is ABSENT or current is None:
            return ABSENT
        if isinstance(current, Mapping):
            key = token if isinstance(token, str) else str(token)
            if key not in current:
                return ABSENT
            current = current[key]
        elif isinstance(current, (list, tuple)):
            if isinstance(token, str):
                if not token.lstrip("-").isdigit():
                    return ABSENT
                token = int(token)
            if not -len(current) <= token < len(current):
                return ABSENT
            current = current[token]
        else:
            return ABSENT
    return current


def find_placeholders(value: Any) -> Iterator[Tuple[str, str]]:
    """Yield ``(step_id, path)`` for every placeholder anywhere in ``value``."""
    if isinstance(value, str):
        for match in PLACEHOLDER_RE.finditer(value):
            yield match.group("step"), match.group("path")
    elif isinstance(value, Mapping):
        for item in value.values():
            yield from find_placeholders(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from find_placeholders(item)


def lookup(step_id: str, path: str, outputs: Mapping[str, Any]) -> Any:
    """Value at ``path`` in the recorded output of ``step_id``, or ``ABSENT``."""
    if step_id not in outputs:
        return ABSENT
    return get_path(outputs[step_id], path)


def _to_text(value: Any) -> str:
    if value is ABSENT:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, bool)) or value is None:
        return json.dumps(value, default=str)
    return str(value)


def _resolve_string(text: str, outputs: Mapping[str, Any]) -> Any:
    whole = PLACEHOLDER_RE.fullmatch(text.strip())
    if whole is not None:
        value = lookup(whole.group("step"), whole.group("path"), outputs)
        # Value substitution keeps the original type.
        return None if value is ABSENT else copy.deepcopy(value)

    return PLACEHOLDER_RE.sub(
        lambda m: _to_text(lookup(m.group("step"), m.group("path"), outputs)),
        text,
    )


def resolve(value: Any, outputs: Mapping[str, Any]) -> Any:
    """
    Return a copy of ``value`` with every placeholder substituted.

    Args:
        value: A task input (any JSON-like value)
        outputs: Step id -> output of the steps executed so far

    A string that is exactly one placeholder becomes the referenced value
    (``None`` when absent). Placeholders inside longer strings are replaced
    by text (empty when absent). Never raises on dangling references.
    """
    if isinstance(value, str):
        return _resolve_string(value, outputs)
    if isinstance(value, Mapping):
        return {key: resolve(item, outputs) for key, item in value.items()}
    if isinstance(value, list):
        return [resolve(item, outputs) for item in value]
    if isinstance(value, tuple):
        return tuple(resolve(item, outputs) for item in value)
    return copy.deepcopy(value)
