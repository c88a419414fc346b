"""
Data models for UniPen

This module contains the value types produced by the field parsers and the
closed family of statement dataclasses produced by the statement dispatcher.
Statements are frozen; their source location is excluded from equality.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Optional, Tuple, Union

from .keywords import Keyword
from .vocabulary import (
    Acceptance,
    CoordinateAxis,
    CustomToken,
    Quality,
    TimeUnit,
    TypeMarker,
)

Number = Union[int, float]
Reserved = Union[Enum, CustomToken]


@dataclass(frozen=True)
class SourceLocation:
    """Where a statement starts"""
    file: Optional[Path]
    line: int
    column: int = 1

    def format(self) -> str:
        return f"{self.file or '<string>'}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Component:
    """A numbered pen component, optionally narrowed to one point within it"""
    index: Number
    point: Optional[Number] = None


@dataclass(frozen=True)
class Range:
    """Inclusive component range; start <= end is checked by the validator"""
    start: Component
    end: Component

    @property
    def inverted(self) -> bool:
        return self.start.index > self.end.index


ListItem = Union[Component, Range]
ComponentList = Tuple[ListItem, ...]


@dataclass(frozen=True)
class Date:
    """Recording date; None marks a field written as ``?``"""
    month: Optional[Number] = None
    day: Optional[Number] = None
    year: Optional[Number] = None

    @property
    def unknown(self) -> bool:
        return self.month is None and self.day is None and self.year is None


@dataclass(frozen=True)
class Age:
    low: Optional[Number] = None
    high: Optional[Number] = None


class Statement:
    """Base of every statement variant"""

    keyword: Union[Keyword, str]
    location: Optional[SourceLocation]

    @property
    def literal(self) -> str:
        """The keyword exactly as written, e.g. ``.SEGMENT``"""
        if isinstance(self.keyword, Keyword):
            return self.keyword.value
        return self.keyword

    def component_lists(self) -> Tuple[ComponentList, ...]:
        """Component lists referenced by this statement"""
        return ()


def _location():
    return field(default=None, compare=False, repr=False)


# Shape classes shared by several keywords


@dataclass(frozen=True)
class NumberStatement(Statement):
    keyword: Keyword
    value: Number
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class StringStatement(Statement):
    keyword: Keyword
    value: str
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class TextStatement(Statement):
    """Free text, internal newlines preserved"""
    keyword: Keyword
    text: str
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class NumberListStatement(Statement):
    keyword: Keyword
    values: Tuple[Number, ...]
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class StringListStatement(Statement):
    """.ALPHABET / .LEXICON entries (quoted labels or bare strings)"""
    keyword: Keyword
    items: Tuple[str, ...]
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class VocabularyStatement(Statement):
    keyword: Keyword
    value: Reserved
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class PenStatement(Statement):
    """.PEN_DOWN / .PEN_UP sample data, one row per physical line"""
    keyword: Keyword
    rows: Tuple[Tuple[Number, ...], ...]
    location: Optional[SourceLocation] = _location()

    @property
    def values(self) -> Tuple[Number, ...]:
        return tuple(value for row in self.rows for value in row)


# Statements with a fixed keyword


@dataclass(frozen=True)
class Coord(Statement):
    axes: Tuple[Reserved, ...]
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.COORD


@dataclass(frozen=True)
class Hierarchy(Statement):
    levels: Tuple[str, ...]
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.HIERARCHY


@dataclass(frozen=True)
class DateStatement(Statement):
    date: Date
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.DATE


@dataclass(frozen=True)
class AgeStatement(Statement):
    age: Age
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.AGE


@dataclass(frozen=True)
class Segment(Statement):
    id: str
    members: ComponentList
    quality: Optional[Union[Quality, CustomToken]] = None
    label: Optional[str] = None
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.SEGMENT

    def component_lists(self) -> Tuple[ComponentList, ...]:
        return (self.members,)


@dataclass(frozen=True)
class StartBox(Statement):
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.START_BOX


@dataclass(frozen=True)
class SetEntry:
    file: str
    set_name: str
    hierarchy: str
    members: ComponentList


@dataclass(frozen=True)
class SetStatement(Statement):
    """.TRAINING_SET / .TEST_SET / .ADAPT_SET"""
    keyword: Keyword
    entries: Tuple[SetEntry, ...]
    location: Optional[SourceLocation] = _location()

    def component_lists(self) -> Tuple[ComponentList, ...]:
        return tuple(entry.members for entry in self.entries)


@dataclass(frozen=True)
class LexiconSetEntry:
    lexicon: str
    hierarchy: str
    members: ComponentList


@dataclass(frozen=True)
class LexiconSet(Statement):
    entries: Tuple[LexiconSetEntry, ...]
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.LEXICON_SET

    def component_lists(self) -> Tuple[ComponentList, ...]:
        return tuple(entry.members for entry in self.entries)


@dataclass(frozen=True)
class RecTime(Statement):
    id: str
    members: ComponentList
    time: Number
    unit: Optional[Union[TimeUnit, CustomToken]] = None
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.REC_TIME

    def component_lists(self) -> Tuple[ComponentList, ...]:
        return (self.members,)


@dataclass(frozen=True)
class RecResult(Statement):
    """.REC_LABELS / .REC_SCORES"""
    keyword: Keyword
    id: str
    members: ComponentList
    decision: Union[Acceptance, CustomToken, int, float]
    labels: Tuple[str, ...]
    location: Optional[SourceLocation] = _location()

    def component_lists(self) -> Tuple[ComponentList, ...]:
        return (self.members,)


@dataclass(frozen=True)
class KeywordDeclaration(Statement):
    name: str
    type: Union[TypeMarker, CustomToken] = TypeMarker.FREE_TEXT
    text: str = ""
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.KEYWORD


@dataclass(frozen=True)
class ReserveDeclaration(Statement):
    token: str
    text: str = ""
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.RESERVE


@dataclass(frozen=True)
class Include(Statement):
    name: str
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.INCLUDE


@dataclass(frozen=True)
class Comment(Statement):
    text: str
    location: Optional[SourceLocation] = _location()
    keyword: ClassVar[Keyword] = Keyword.COMMENT


@dataclass(frozen=True)
class CustomStatement(Statement):
    """
    A statement opened by a keyword that is not built in.

    ``value`` is free text unless the keyword was declared with a typed
    marker before use, in which case it is a tuple of typed values.
    """
    keyword: str
    value: Union[str, Tuple]
    type: Optional[TypeMarker] = None
    location: Optional[SourceLocation] = _location()

    def component_lists(self) -> Tuple[ComponentList, ...]:
        if self.type is TypeMarker.COMPONENTS:
            return tuple(self.value)
        return ()
