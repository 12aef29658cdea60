"""
Errors raised when a .env file cannot be read or contains unusable lines.
"""
from typing import List, Optional, Union
from .entry import Entry, SkippedLine

IO_ERROR = "io"
LINES_ERROR = "lines"

# Number of skipped lines spelled out in a "lines" error message.
MAX_REPORTED_LINES = 10

class SimpleEnvError(Exception):
    """
    Error raised by the loading helpers.

    ``kind`` is ``"io"`` when the file could not be read and ``"lines"`` when
    strict loading found lines that are not KEY=VALUE pairs. For ``"lines"``
    errors ``entries`` holds everything that did parse.
    """
    def __init__(self, kind: str, message: str, entries: Optional[List[Entry]] = None):
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message
        self.entries = entries

    @classmethod
    def from_os_error(cls, error: Union[OSError, UnicodeDecodeError]) -> "SimpleEnvError":
        """Wraps a failure to open or decode the file."""
        return cls(IO_ERROR, str(error))

    @classmethod
    def from_skipped_lines(cls,
                           skipped: List[SkippedLine],
                           entries: List[Entry]) -> "SimpleEnvError":
        """
        Builds a "lines" error listing the first skipped lines.

        :param skipped: Lines the parser could not use, in file order.
        :param entries: The entries that were parsed successfully.
        :return: The error, carrying ``entries`` as its partial result.
        """
        messages = [line.describe() for line in skipped[:MAX_REPORTED_LINES]]
        if len(skipped) > MAX_REPORTED_LINES:
            messages.append(f"And {len(skipped) - MAX_REPORTED_LINES} more errors in .env file")
        return cls(LINES_ERROR, "\n".join(messages), entries=list(entries))
