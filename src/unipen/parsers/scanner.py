"""
Statement boundary scanner

Splits raw UniPen text into statement spans. A statement starts at the
beginning of the document or at a newline immediately followed by ``.``;
it runs until the next such start or the end of input, so free-text
statements may cover several physical lines.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..errors import ErrorContext, UniPenSyntaxError

STATEMENT_START = "\n."


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


@dataclass(frozen=True)
class StatementSpan:
    """Raw text of one statement and where it starts in the source"""
    text: str
    offset: int
    line: int
    column: int = 1


class SourceText:
    """Normalized source with offset -> (line, column) lookup for error reporting"""

    def __init__(self, text: str, path: Optional[Path] = None):
        self.text = normalize_newlines(text)
        self.path = path
        self._line_starts: List[int] = [0]
        for index, char in enumerate(self.text):
            if char == "\n":
                self._line_starts.append(index + 1)

    def position(self, offset: int) -> Tuple[int, int]:
        """1-indexed (line, column) of an absolute offset"""
        low, high = 0, len(self._line_starts) - 1
        while low < high:
            middle = (low + high + 1) // 2
            if self._line_starts[middle] <= offset:
                low = middle
            else:
                high = middle - 1
        return low + 1, offset - self._line_starts[low] + 1

    def line_text(self, line: int) -> str:
        start = self._line_starts[line - 1]
        end = self.text.find("\n", start)
        return self.text[start:] if end == -1 else self.text[start:end]

    def context(self, offset: int) -> ErrorContext:
        line, column = self.position(offset)
        return ErrorContext(self.path, line, column, self.line_text(line))


class BoundaryScanner:
    """Yield the statement spans of a SourceText in order"""

    def __init__(self, source: SourceText):
        self.source = source

    def _next_start(self, cursor: int) -> int:
        """Offset of the ``.`` that opens the next statement at or after ``cursor``"""
        found = self.source.text.find(STATEMENT_START, cursor)
        return len(self.source.text) if found == -1 else found + 1

    def scan(self) -> Iterator[StatementSpan]:
        text = self.source.text
        start = len(text) - len(text.lstrip())
        if start < len(text) and text[start] != ".":
            raise UniPenSyntaxError(
                "statement keyword", self.source.context(start), found=text[start]
            )

        while start < len(text):
            end = self._next_start(start + 1)
            body = text[start:end].rstrip()
            line, column = self.source.position(start)
            yield StatementSpan(body, start, line, column)
            start = end
