"""
Parsers for .env files, supporting quotes and comments.
"""
import logging
from typing import List, Optional, Tuple
from ..MODELS.entry import Entry, ParseResult, SkippedLine, SkipReason
from ..MODELS.load_options import DEFAULT_ENCODING

logger = logging.getLogger(__name__)

QUOTE_CHARS = ('"', "'", '`')
COMMENT_CHAR = '#'
SEPARATOR = '='

def split_lines(content: str) -> List[str]:
    """
    Splits text on ``\\r\\n``, ``\\n`` and ``\\r`` terminators.

    Unlike ``str.splitlines`` no other characters (form feed, U+2028, ...)
    end a line, so they survive inside quoted values.
    """
    lines = []
    start = 0
    index = 0
    length = len(content)
    while index < length:
        char = content[index]
        if char == '\n' or char == '\r':
            lines.append(content[start:index])
            if char == '\r' and index + 1 < length and content[index + 1] == '\n':
                index += 1
            start = index + 1
        index += 1
    if start < length:
        lines.append(content[start:])
    return lines

def strip_trailing_comment(value: str) -> str:
    """
    Drops a ``#...`` comment that follows a closed quoted value.

    Unquoted values are returned untouched: a ``#`` inside them is data.
    """
    if len(value) < 2 or value[0] not in QUOTE_CHARS:
        return value
    closing = value.find(value[0], 1)
    if closing == -1:
        return value
    if value[closing + 1:].strip().startswith(COMMENT_CHAR):
        return value[:closing + 1]
    return value

def unquote(value: str) -> str:
    """
    Removes one pair of matching outer quotes. Mixed quotes are left alone.
    """
    if len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value

class EnvParser:
    """
    Parser for .env files.
    """
    def __init__(self, encoding: str = DEFAULT_ENCODING):
        """
        Initializes the parser.

        :param encoding: Encoding used when reading files from disk.
        """
        self.encoding = encoding

    def parse(self, env_path: str) -> List[Entry]:
        """
        Parses an .env file from a path.

        Args:
            env_path (str): Path to the .env file.

        Returns:
            List[Entry]: Entries in file order, duplicates included.

        Raises:
            OSError: If the file cannot be read.
        """
        return self.parse_file(env_path).entries

    def parse_file(self, env_path: str) -> ParseResult:
        """
        Parses an .env file from a path, keeping the skipped-line diagnostics.
        """
        with open(env_path, 'r', encoding=self.encoding, newline='') as f:
            content = f.read()
        return self.parse_document(content)

    def parse_from_string(self, content: str) -> List[Entry]:
        """
        Parses environment variables from a string.
        Handles quotes and comments. Lines that are not KEY=VALUE are skipped.
        """
        return self.parse_document(content).entries

    def parse_document(self, content: str) -> ParseResult:
        """
        Parses a string into entries plus a record of every skipped line.

        :param content: Text of a .env file.
        :return: The parse result; never raises for malformed input.
        """
        entries = []
        skipped = []
        for line_number, raw_line in enumerate(split_lines(content), start=1):
            entry, reason = self._parse_line(raw_line)
            if entry is not None:
                entries.append(entry)
            elif reason is not None:
                logger.debug("Skipping line %d: %s", line_number, reason.value)
                skipped.append(SkippedLine(
                    line_number=line_number,
                    text=raw_line.strip(),
                    reason=reason
                ))
        return ParseResult(entries=entries, skipped=skipped)

    @staticmethod
    def parse_line(line: str) -> Optional[Entry]:
        """
        Parses a single line.

        :param line: One line of a .env file without its terminator.
        :return: The entry, or None for blank, comment and malformed lines.
        """
        entry, _ = EnvParser._parse_line(line)
        return entry

    @staticmethod
    def _parse_line(line: str) -> Tuple[Optional[Entry], Optional[SkipReason]]:
        line = line.strip()
        if not line or line[0] == COMMENT_CHAR:
            return None, None

        separator = line.find(SEPARATOR)
        if separator == -1:
            return None, SkipReason.MISSING_SEPARATOR

        key = line[:separator].strip()
        if not key:
            return None, SkipReason.EMPTY_KEY

        value = line[separator + 1:].strip()
        value = unquote(strip_trailing_comment(value))
        return Entry(key=key, value=value), None
