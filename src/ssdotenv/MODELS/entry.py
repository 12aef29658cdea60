"""
Models for parsed .env entries and the diagnostics produced while parsing.
"""
from typing import Dict, List, Tuple
from pydantic import BaseModel, ConfigDict
from enum import Enum

class Entry(BaseModel):
    """
    A single key/value pair read from one line of a .env file.
    Both parts are already trimmed and unquoted.
    """
    model_config = ConfigDict(frozen=True)

    key: str
    value: str

    def as_tuple(self) -> Tuple[str, str]:
        return (self.key, self.value)

class SkipReason(str, Enum):
    """
    Why a non-blank, non-comment line produced no entry.
    """
    MISSING_SEPARATOR = "missing_separator"
    EMPTY_KEY = "empty_key"

class SkippedLine(BaseModel):
    """
    A line the parser could not interpret as KEY=VALUE.
    """
    model_config = ConfigDict(frozen=True)

    line_number: int
    text: str
    reason: SkipReason

    def describe(self) -> str:
        if self.reason == SkipReason.MISSING_SEPARATOR:
            problem = "No '=' separator"
        else:
            problem = "No name"
        return f"Error in line {self.line_number}: {problem} in '{self.text}'"

class ParseResult(BaseModel):
    """
    Entries in file order, duplicates included, plus the skipped lines.
    """
    entries: List[Entry] = []
    skipped: List[SkippedLine] = []

    def to_dict(self) -> Dict[str, str]:
        """Collapses the entries into a mapping; later duplicates win."""
        return {entry.key: entry.value for entry in self.entries}

    def as_tuples(self) -> List[Tuple[str, str]]:
        return [entry.as_tuple() for entry in self.entries]
