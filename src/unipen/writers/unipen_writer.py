"""
UniPen Writer

This module serializes statements and documents back to UniPen text.
Output is normalized (one space between fields, one pen sample row per
line) and parses back to equal statements.
"""

from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Union

from ..core.document import Document
from ..core.models import (
    Age,
    AgeStatement,
    Comment,
    Component,
    ComponentList,
    Coord,
    CustomStatement,
    Date,
    DateStatement,
    Hierarchy,
    Include,
    KeywordDeclaration,
    LexiconSet,
    Number,
    NumberListStatement,
    NumberStatement,
    PenStatement,
    Range,
    RecResult,
    RecTime,
    ReserveDeclaration,
    Segment,
    SetStatement,
    StartBox,
    Statement,
    StringListStatement,
    StringStatement,
    TextStatement,
    VocabularyStatement,
)
from ..core.vocabulary import CustomToken, Quality, TypeMarker
from ..parsers.fields import UNKNOWN

# Characters that must be escaped inside a quoted label
LABEL_UNESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\t": "\\t",
    "\n": "\\n",
}


class UniPenWriter:
    """Write UniPen statements to string format"""

    def write(self, document: Union[Document, Iterable[Statement]]) -> str:
        """Generate UniPen text for every statement, newline terminated"""
        lines = [self.write_statement(statement) for statement in document]
        return "\n".join(lines) + "\n" if lines else ""

    def write_statement(self, statement: Statement) -> str:
        """Generate the text of one statement (pen data spans several lines)"""
        if isinstance(statement, PenStatement):
            rows = [" ".join(self.format_number(v) for v in row) for row in statement.rows]
            return "\n".join([statement.literal] + rows)
        fields = self._fields(statement)
        return " ".join([statement.literal] + [f for f in fields if f != ""])

    def _fields(self, statement: Statement) -> List[str]:
        if isinstance(statement, NumberStatement):
            return [self.format_number(statement.value)]
        if isinstance(statement, StringStatement):
            return [statement.value]
        if isinstance(statement, (TextStatement, Comment)):
            return [statement.text]
        if isinstance(statement, NumberListStatement):
            return [self.format_number(v) for v in statement.values]
        if isinstance(statement, StringListStatement):
            return [self.format_item(item) for item in statement.items]
        if isinstance(statement, VocabularyStatement):
            return [self.format_token(statement.value)]
        if isinstance(statement, Coord):
            return [self.format_token(axis) for axis in statement.axes]
        if isinstance(statement, Hierarchy):
            return list(statement.levels)
        if isinstance(statement, DateStatement):
            return [self.format_date(statement.date)]
        if isinstance(statement, AgeStatement):
            return [self.format_age(statement.age)]
        if isinstance(statement, Segment):
            return self._segment(statement)
        if isinstance(statement, StartBox):
            return []
        if isinstance(statement, SetStatement):
            fields: List[str] = []
            for entry in statement.entries:
                fields += [entry.file, entry.set_name, entry.hierarchy, self.format_list(entry.members)]
            return fields
        if isinstance(statement, LexiconSet):
            fields = []
            for entry in statement.entries:
                fields += [entry.lexicon, entry.hierarchy, self.format_list(entry.members)]
            return fields
        if isinstance(statement, RecTime):
            fields = [statement.id, self.format_list(statement.members), self.format_number(statement.time)]
            if statement.unit is not None:
                fields.append(self.format_token(statement.unit))
            return fields
        if isinstance(statement, RecResult):
            decision = statement.decision
            return [
                statement.id,
                self.format_list(statement.members),
                self.format_token(decision)
                if isinstance(decision, (Enum, CustomToken))
                else self.format_number(decision),
            ] + [self.format_label(label) for label in statement.labels]
        if isinstance(statement, KeywordDeclaration):
            return [statement.name, self.format_token(statement.type), statement.text]
        if isinstance(statement, ReserveDeclaration):
            return [statement.token, statement.text]
        if isinstance(statement, Include):
            return [statement.name]
        if isinstance(statement, CustomStatement):
            return self._custom(statement)
        raise TypeError(f"Cannot write statement of type {type(statement).__name__}")

    def _segment(self, segment: Segment) -> List[str]:
        fields = [segment.id, self.format_list(segment.members)]
        if segment.quality is not None or segment.label is not None:
            fields.append(self.format_token(segment.quality or Quality.UNKNOWN))
        if segment.label is not None:
            fields.append(self.format_label(segment.label))
        return fields

    def _custom(self, statement: CustomStatement) -> List[str]:
        if isinstance(statement.value, str):
            return [statement.value]
        if statement.type is TypeMarker.NUMBER:
            return [self.format_number(v) for v in statement.value]
        if statement.type is TypeMarker.LABEL:
            return [self.format_label(v) for v in statement.value]
        if statement.type is TypeMarker.COMPONENTS:
            return [self.format_list(v) for v in statement.value]
        if statement.type is TypeMarker.RESERVED:
            return [self.format_token(v) for v in statement.value]
        return [str(v) for v in statement.value]

    # Field formatting

    @staticmethod
    def format_number(value: Number) -> str:
        """Integers as written; floats in positional notation with a '.'"""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Not a UniPen number: {value!r}")
        if isinstance(value, int):
            return str(value)
        text = repr(value)
        if "e" in text or "E" in text:
            text = format(Decimal(text), "f")
        if "." not in text:
            text += ".0"
        return text

    @staticmethod
    def format_label(text: str) -> str:
        return '"' + "".join(LABEL_UNESCAPES.get(char, char) for char in text) + '"'

    @classmethod
    def format_item(cls, text: str) -> str:
        """Alphabet/lexicon entry: bare when it reads back as a string, else quoted"""
        if text and text[0] != '"' and all(c.isprintable() and not c.isspace() for c in text):
            return text
        return cls.format_label(text)

    @staticmethod
    def format_token(token: Union[Enum, CustomToken]) -> str:
        return token.value

    @classmethod
    def format_component(cls, component: Component) -> str:
        text = cls.format_number(component.index)
        if component.point is not None:
            text += ":" + cls.format_number(component.point)
        return text

    @classmethod
    def format_list(cls, members: ComponentList) -> str:
        parts = []
        for item in members:
            if isinstance(item, Range):
                parts.append(f"{cls.format_component(item.start)}-{cls.format_component(item.end)}")
            else:
                parts.append(cls.format_component(item))
        return ",".join(parts)

    @classmethod
    def format_date(cls, date: Date) -> str:
        if date.unknown:
            return UNKNOWN
        return " ".join(
            UNKNOWN if part is None else cls.format_number(part)
            for part in (date.month, date.day, date.year)
        )

    @classmethod
    def format_age(cls, age: Age) -> str:
        if age.low is None:
            return UNKNOWN
        if age.high is None:
            return cls.format_number(age.low)
        return f"{cls.format_number(age.low)} {cls.format_number(age.high)}"
