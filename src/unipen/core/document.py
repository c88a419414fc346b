"""
Assembled UniPen document and its read-only queries
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Union

from .keywords import Keyword
from .models import (
    AgeStatement,
    Component,
    DateStatement,
    ListItem,
    NumberStatement,
    PenStatement,
    Range,
    Segment,
    Statement,
    StringStatement,
    TextStatement,
    VocabularyStatement,
)

# Statements exposed by Document.metadata()
METADATA_KEYWORDS = (
    Keyword.VERSION,
    Keyword.DATA_SOURCE,
    Keyword.DATA_ID,
    Keyword.DATA_CONTACT,
    Keyword.DATA_INFO,
    Keyword.SETUP,
    Keyword.PAD,
    Keyword.DATE,
    Keyword.STYLE,
    Keyword.WRITER_ID,
    Keyword.COUNTRY,
    Keyword.HAND,
    Keyword.AGE,
    Keyword.SEX,
    Keyword.SKILL,
    Keyword.WRITER_INFO,
)


@dataclass
class ComponentSet:
    """Pen components opened by one .START_SET (or preceding every .START_SET)"""

    name: Optional[str]
    start: Optional[int]  # index of the .START_SET statement
    components: List[PenStatement] = field(default_factory=list)


def group_components(statements: Iterable[Statement]) -> List[ComponentSet]:
    """
    Pen statements grouped per .START_SET occurrence, in document order.

    Numbering restarts at every .START_SET, also when a set name repeats.
    Pen data before the first .START_SET forms a group named None.
    """
    groups: List[ComponentSet] = []
    current: Optional[ComponentSet] = None
    for index, statement in enumerate(statements):
        if statement.keyword is Keyword.START_SET:
            current = ComponentSet(statement.value, index)
            groups.append(current)
        elif isinstance(statement, PenStatement):
            if current is None:
                current = ComponentSet(None, None)
                groups.append(current)
            current.components.append(statement)
    return groups


class Document:
    """Validated statements of one parse, with lookup indexes"""

    def __init__(
        self,
        statements: Sequence[Statement],
        files: Sequence[Path] = (),
        warnings: Sequence[str] = (),
    ):
        self._statements = tuple(statements)
        self.files = tuple(files)
        self.warnings = tuple(warnings)

        self._by_keyword: Dict[str, List[Statement]] = {}
        self._segments: Dict[str, List[Segment]] = {}
        for statement in self._statements:
            self._by_keyword.setdefault(statement.literal, []).append(statement)
            if isinstance(statement, Segment):
                self._segments.setdefault(statement.id, []).append(statement)
        self._sets = group_components(self._statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self._statements)

    def __len__(self) -> int:
        return len(self._statements)

    def __repr__(self) -> str:
        return f"Document({len(self._statements)} statements, {len(self.files)} files)"

    def statements(self, keyword: Optional[Union[Keyword, str]] = None) -> List[Statement]:
        """Every statement, or only those of ``keyword``"""
        if keyword is None:
            return list(self._statements)
        return self.query(keyword)

    def query(self, keyword: Union[Keyword, str]) -> List[Statement]:
        """All statements opened by ``keyword`` (``Keyword`` or literal like ``.SEGMENT``), in order"""
        literal = keyword.value if isinstance(keyword, Keyword) else keyword
        return list(self._by_keyword.get(literal, ()))

    def segment(self, segment_id: str) -> Optional[Segment]:
        """First .SEGMENT with this id, or None"""
        found = self._segments.get(segment_id)
        return found[0] if found else None

    def segments(self, segment_id: str) -> List[Segment]:
        return list(self._segments.get(segment_id, ()))

    @staticmethod
    def resolve(item: Union[ListItem, Sequence[ListItem]]) -> List[int]:
        """
        Component indices denoted by a component, range or component list.

        Ranges are expanded inclusively in the direction they are written;
        point sub-indices narrow within a component and do not change which
        components are denoted.
        """
        if isinstance(item, Component):
            return [int(item.index)]
        if isinstance(item, Range):
            start, end = int(item.start.index), int(item.end.index)
            step = 1 if start <= end else -1
            return list(range(start, end + step, step))
        indices: List[int] = []
        for entry in item:
            indices.extend(Document.resolve(entry))
        return indices

    def metadata(self) -> Dict[str, Any]:
        """Writer and data documentation as ``{"WRITER_ID": ..., ...}``; last statement wins"""
        wanted = set(METADATA_KEYWORDS)
        view: Dict[str, Any] = {}
        for statement in self._statements:
            if statement.keyword not in wanted:
                continue
            view[statement.keyword.label] = self._metadata_value(statement)
        return view

    @staticmethod
    def _metadata_value(statement: Statement) -> Any:
        if isinstance(statement, (NumberStatement, StringStatement)):
            return statement.value
        if isinstance(statement, TextStatement):
            return statement.text
        if isinstance(statement, VocabularyStatement):
            value = statement.value
            return value.value if isinstance(value, Enum) else value.name
        if isinstance(statement, DateStatement):
            return statement.date
        if isinstance(statement, AgeStatement):
            return statement.age
        return None

    def component_sets(self) -> List[ComponentSet]:
        return list(self._sets)

    def sets(self) -> List[Optional[str]]:
        """Set names per .START_SET in document order (``None`` for data before any .START_SET)"""
        return [group.name for group in self._sets]

    def components(self, set_name: Optional[str] = None) -> List[PenStatement]:
        """
        Pen components of one set; index in the list is the component number.

        A repeated set name refers to its last occurrence, which is the one
        later references resolve against.
        """
        for group in reversed(self._sets):
            if group.name == set_name:
                return list(group.components)
        return []

    def component(self, index: int, set_name: Optional[str] = None) -> PenStatement:
        components = self.components(set_name)
        if not 0 <= index < len(components):
            raise IndexError(f"component {index} out of range for set {set_name!r}")
        return components[index]
