"""
Typed field parsers

A FieldCursor walks the text of one statement span and consumes one typed
field at a time, skipping the separators (space, tab, newline) between
fields. Every failure is raised as a positioned UniPenSyntaxError.
"""

import re
from enum import Enum
from typing import List, Optional, Tuple, Type, Union

from ..core.keywords import KEYWORD_PATTERN
from ..core.models import Age, Component, ComponentList, Date, ListItem, Number, Range
from ..core.vocabulary import CustomToken, Vocabularies, VocabularyRegistry
from ..errors import UniPenSyntaxError
from .scanner import SourceText, StatementSpan

NUMBER_PATTERN = r"-?[0-9]+(?:\.[0-9]*)?"
NUMBER_RE = re.compile(NUMBER_PATTERN)
TOKEN_RE = re.compile(r"\S+")

_COMPONENT = rf"({NUMBER_PATTERN})(?::({NUMBER_PATTERN}))?"
LIST_ITEM_RE = re.compile(rf"{_COMPONENT}(?:-{_COMPONENT})?")

UNKNOWN = "?"

LABEL_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "t": "\t",
    "n": "\n",
    " ": " ",
    "@": "@",
}


def to_number(literal: str) -> Number:
    """Integer literal -> int, decimal literal (with a '.') -> float"""
    return float(literal) if "." in literal else int(literal)


def is_number(token: str) -> bool:
    return NUMBER_RE.fullmatch(token) is not None


class FieldCursor:
    """Recursive-descent reader over one statement"""

    def __init__(
        self,
        span: StatementSpan,
        source: SourceText,
        registry: Optional[VocabularyRegistry] = None,
    ):
        self.text = span.text
        self.base = span.offset
        self.source = source
        self.registry = registry
        self.pos = 0

    # Position handling

    def error(self, expected: str, at: Optional[int] = None, found: Optional[str] = None):
        offset = self.pos if at is None else at
        return UniPenSyntaxError(expected, self.source.context(self.base + offset), found)

    def skip_separators(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def at_end(self) -> bool:
        self.skip_separators()
        return self.pos >= len(self.text)

    def peek_token(self) -> Optional[str]:
        """Next whitespace-delimited token without consuming it"""
        self.skip_separators()
        match = TOKEN_RE.match(self.text, self.pos)
        return match.group() if match else None

    def _take_token(self, expected: str) -> Tuple[str, int]:
        self.skip_separators()
        match = TOKEN_RE.match(self.text, self.pos)
        if not match:
            raise self.error(expected, found="end of statement")
        self.pos = match.end()
        return match.group(), match.start()

    def expect_end(self) -> None:
        if not self.at_end():
            token = self.peek_token()
            raise self.error("end of statement", found=token)

    # Field parsers

    def keyword(self) -> str:
        token, start = self._take_token("statement keyword")
        if not KEYWORD_PATTERN.fullmatch(token):
            raise self.error("statement keyword", at=start, found=token)
        return token

    def number(self, expected: str = "number") -> Number:
        token, start = self._take_token(expected)
        if not is_number(token):
            raise self.error(expected, at=start, found=token)
        return to_number(token)

    def numbers(self) -> Tuple[Number, ...]:
        values = []
        while not self.at_end():
            values.append(self.number())
        return tuple(values)

    def string(self, expected: str = "string") -> str:
        token, start = self._take_token(expected)
        for index, char in enumerate(token):
            if not char.isprintable():
                raise self.error(expected, at=start + index, found=char)
        return token

    def strings(self) -> Tuple[str, ...]:
        values = []
        while not self.at_end():
            values.append(self.string())
        return tuple(values)

    def free_text(self) -> str:
        """Everything up to the statement boundary, internal whitespace kept"""
        text = self.text[self.pos:].strip()
        self.pos = len(self.text)
        return text

    def label(self) -> str:
        self.skip_separators()
        start = self.pos
        if start >= len(self.text) or self.text[start] != '"':
            raise self.error("quoted label", found=self.peek_token() or "end of statement")

        chars: List[str] = []
        index = start + 1
        while index < len(self.text):
            char = self.text[index]
            if char == '"':
                self.pos = index + 1
                if self.pos < len(self.text) and not self.text[self.pos].isspace():
                    raise self.error("separator after label", found=self.text[self.pos])
                return "".join(chars)
            if char == "\\":
                escaped = self.text[index + 1] if index + 1 < len(self.text) else ""
                if escaped.isspace():
                    # Whitespace reads as a space before escapes apply
                    chars.append(" ")
                    index += 2
                    continue
                if escaped not in LABEL_ESCAPES:
                    raise self.error(
                        'escape sequence (\\" \\\\ \\/ \\t \\n \\  \\@)',
                        at=index,
                        found="\\" + escaped,
                    )
                chars.append(LABEL_ESCAPES[escaped])
                index += 2
                continue
            if char.isspace():
                chars.append(" ")
            elif char.isprintable():
                chars.append(char)
            else:
                raise self.error("label character", at=index, found=char)
            index += 1

        raise self.error('closing " of label', at=start)

    def labels(self, minimum: int = 0) -> Tuple[str, ...]:
        values = []
        while not self.at_end() or len(values) < minimum:
            values.append(self.label())
        return tuple(values)

    def label_or_string(self) -> str:
        self.skip_separators()
        if self.text.startswith('"', self.pos):
            return self.label()
        return self.string("label or string")

    def reserved(self, vocabulary: Type[Enum]) -> Union[Enum, CustomToken]:
        """One token of ``vocabulary`` or a token declared by .RESERVE"""
        expected = f"one of {Vocabularies.describe(vocabulary)}"
        token, start = self._take_token(expected)
        member = Vocabularies.lookup(vocabulary, token)
        if member is not None:
            return member
        if self.registry is not None and self.registry.has_token(token):
            return CustomToken(token)
        raise self.error(expected, at=start, found=token)

    def component_list(self) -> ComponentList:
        expected = "component list (e.g. 3,5-7,9:2)"
        token, start = self._take_token(expected)
        items: List[ListItem] = []
        offset = start
        for part in token.split(","):
            match = LIST_ITEM_RE.fullmatch(part)
            if not match:
                raise self.error(expected, at=offset, found=part or ",")
            first = self._component(match.group(1), match.group(2))
            if match.group(3) is None:
                items.append(first)
            else:
                items.append(Range(first, self._component(match.group(3), match.group(4))))
            offset += len(part) + 1
        return tuple(items)

    @staticmethod
    def _component(index: str, point: Optional[str]) -> Component:
        return Component(to_number(index), to_number(point) if point is not None else None)

    def date(self) -> Date:
        expected = "number or '?'"
        token, start = self._take_token("date or '?'")
        if token == UNKNOWN and self.at_end():
            return Date()
        parts = [(token, start)]
        while len(parts) < 3:
            parts.append(self._take_token(expected))
        values = []
        for token, start in parts:
            if token == UNKNOWN:
                values.append(None)
            elif is_number(token):
                values.append(to_number(token))
            else:
                raise self.error(expected, at=start, found=token)
        return Date(*values)

    def age(self) -> Age:
        if self.peek_token() == UNKNOWN:
            self._take_token(UNKNOWN)
            return Age()
        low = self.number("age or '?'")
        high = None if self.at_end() else self.number()
        return Age(low, high)

    def number_rows(self) -> Tuple[Tuple[Number, ...], ...]:
        """Numbers grouped by physical line, blank lines dropped"""
        rows = []
        current: List[Number] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == "\n":
                if current:
                    rows.append(tuple(current))
                    current = []
                self.pos += 1
            elif char.isspace():
                self.pos += 1
            else:
                match = TOKEN_RE.match(self.text, self.pos)
                if not is_number(match.group()):
                    raise self.error("number", found=match.group())
                current.append(to_number(match.group()))
                self.pos = match.end()
        if current:
            rows.append(tuple(current))
        return tuple(rows)
