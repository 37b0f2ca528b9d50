"""
AIX - a small sectioned text format describing one self-contained AI task.

    [PROMPT]
    <instruction>
    [RULES]
    <constraints>
    [DATA]
    <input data>
    [PYTHON]
    <optional code, preserved but not executed>
"""

from .parser import AixDocument, SECTION_NAMES, parse, parse_file, serialize
from .executor import AixExecutor, AixResult

__all__ = [
    "AixDocument",
    "SECTION_NAMES",
    "parse",
    "parse_file",
    "serialize",
    "AixExecutor",
    "AixResult",
]
