"""
UniPen Document Validator

Cross-statement validation run after include expansion:
- Component references (index sanity, range direction, existing components)
- Table consistency (.ALPHABET_FREQ / .LEXICON_FREQ lengths)
- Declared-before-use custom keywords
- Coordinate layout of pen data (.COORD)
- Advisory checks on hierarchy levels and dates
"""

from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.document import group_components
from ..core.keywords import Keyword
from ..core.models import (
    Component,
    ComponentList,
    Coord,
    CustomStatement,
    DateStatement,
    Hierarchy,
    KeywordDeclaration,
    NumberListStatement,
    PenStatement,
    Range,
    Segment,
    Statement,
    StringListStatement,
)
from ..core.vocabulary import CoordinateAxis
from ..errors import ValidationIssue

# Frequency table -> the table it describes
FREQUENCY_TABLES = {
    Keyword.ALPHABET_FREQ: Keyword.ALPHABET,
    Keyword.LEXICON_FREQ: Keyword.LEXICON,
}


class UniPenValidator:
    """Cross-statement UniPen validator"""

    # Maximum Levenshtein distance for typo suggestions (1-2 character edits)
    MAX_TYPO_DISTANCE = 2

    BUILTIN_KEYWORDS = {keyword.value for keyword in Keyword}

    def __init__(self, strict_ranges: bool = False, strict_component_refs: bool = False):
        self.strict_ranges = strict_ranges
        self.strict_component_refs = strict_component_refs
        self.errors: List[ValidationIssue] = []
        self.warnings: List[ValidationIssue] = []

    def validate_document(
        self, statements: Sequence[Statement]
    ) -> Tuple[List[ValidationIssue], List[ValidationIssue]]:
        """
        Validate the expanded statement stream.

        Returns:
            Tuple of (errors, warnings)
        """
        self.errors.clear()
        self.warnings.clear()

        self._validate_custom_keywords(statements)
        self._validate_coordinates(statements)
        self._validate_references(statements)
        self._validate_frequency_tables(statements)
        self._validate_hierarchy(statements)
        self._validate_dates(statements)

        return list(self.errors), list(self.warnings)

    def _error(self, statement: Optional[Statement], reason: str) -> None:
        self.errors.append(ValidationIssue(statement, reason))

    def _warning(self, statement: Optional[Statement], reason: str) -> None:
        self.warnings.append(ValidationIssue(statement, reason))

    def _validate_custom_keywords(self, statements: Sequence[Statement]) -> None:
        """A custom keyword must be declared by .KEYWORD before its first use"""
        declared_at: Dict[str, int] = {}
        for position, statement in enumerate(statements):
            if isinstance(statement, KeywordDeclaration):
                declared_at.setdefault(statement.name, position)

        for position, statement in enumerate(statements):
            if not isinstance(statement, CustomStatement):
                continue
            declaration = declared_at.get(statement.keyword)
            if declaration is not None and declaration < position:
                continue
            if declaration is not None:
                where = statements[declaration].location
                self._error(
                    statement,
                    f"keyword {statement.keyword} used before its .KEYWORD declaration"
                    + (f" at {where.format()}" if where else ""),
                )
                continue

            reason = f"undeclared keyword {statement.keyword}"
            known = self.BUILTIN_KEYWORDS | set(declared_at)
            is_valid, suggestion = self.validate_keyword(statement.keyword, known)
            if not is_valid and suggestion:
                reason += f" (did you mean {suggestion}?)"
            self._error(statement, reason)

    def _validate_coordinates(self, statements: Sequence[Statement]) -> None:
        """.COORD sanity and sample arity of pen data"""
        axes: Optional[Tuple] = None
        warned_no_coord = False

        for statement in statements:
            if isinstance(statement, Coord):
                seen: Set = set()
                for axis in statement.axes:
                    if axis in seen:
                        self._error(statement, f".COORD repeats axis {axis.value}")
                    seen.add(axis)
                missing = [a.value for a in (CoordinateAxis.X, CoordinateAxis.Y) if a not in seen]
                if missing:
                    self._warning(statement, f".COORD does not declare {', '.join(missing)}")
                axes = statement.axes

            elif isinstance(statement, PenStatement):
                if axes is None:
                    if statement.rows and not warned_no_coord:
                        self._warning(statement, "pen data before any .COORD declaration")
                        warned_no_coord = True
                    continue
                for row_number, row in enumerate(statement.rows, 1):
                    if len(row) != len(axes):
                        self._error(
                            statement,
                            f"sample {row_number} has {len(row)} values, "
                            f".COORD declares {len(axes)} ({' '.join(a.value for a in axes)})",
                        )
                        break

    def _validate_references(self, statements: Sequence[Statement]) -> None:
        """Component lists: index sanity, range direction and existing components"""
        groups = group_components(statements)
        opened_at = {group.start: group for group in groups}
        current = opened_at.get(None)

        for position, statement in enumerate(statements):
            if statement.keyword is Keyword.START_SET:
                current = opened_at[position]
                continue
            for component_list in statement.component_lists():
                if self._check_list(statement, component_list):
                    existing = current.components if current is not None else []
                    self._check_existing(statement, component_list, existing)

    def _check_list(self, statement: Statement, component_list: ComponentList) -> bool:
        """Structural checks; returns True when the indices are usable"""
        usable = True
        for item in component_list:
            ends = (item.start, item.end) if isinstance(item, Range) else (item,)
            for component in ends:
                usable &= self._check_component(statement, component)
            if usable and isinstance(item, Range) and item.inverted:
                reason = f"inverted range {item.start.index}-{item.end.index}"
                if self.strict_ranges:
                    self._error(statement, reason)
                else:
                    self._warning(statement, reason)
        return usable

    def _check_component(self, statement: Statement, component: Component) -> bool:
        ok = True
        for what, value in (("component index", component.index), ("point index", component.point)):
            if value is None:
                continue
            if not isinstance(value, int) or value < 0:
                self._error(statement, f"{what} {value} is not a non-negative integer")
                ok = False
        return ok

    def _check_existing(
        self, statement: Statement, component_list: ComponentList, pen_components: List[PenStatement]
    ) -> None:
        """References past the recorded pen data of the current set"""
        if not pen_components:
            return
        report = self._error if self.strict_component_refs else self._warning
        for item in component_list:
            ends = (item.start, item.end) if isinstance(item, Range) else (item,)
            for component in ends:
                if component.index >= len(pen_components):
                    report(
                        statement,
                        f"component {component.index} does not exist "
                        f"(set has {len(pen_components)} components)",
                    )
                    return
                rows = pen_components[component.index].rows
                if component.point is not None and component.point >= len(rows):
                    report(
                        statement,
                        f"point {component.index}:{component.point} does not exist "
                        f"(component has {len(rows)} points)",
                    )
                    return

    def _validate_frequency_tables(self, statements: Sequence[Statement]) -> None:
        """Frequency tables must be as long as the alphabet/lexicon they describe"""
        for position, statement in enumerate(statements):
            table_keyword = FREQUENCY_TABLES.get(statement.keyword)
            if table_keyword is None or not isinstance(statement, NumberListStatement):
                continue

            table = self._nearest(statements, position, table_keyword)
            if table is None:
                self._warning(
                    statement, f"{statement.literal} without a {table_keyword.value} table"
                )
                continue
            if len(table.items) != len(statement.values):
                self._error(
                    statement,
                    f"{statement.literal} has {len(statement.values)} entries but "
                    f"{table_keyword.value} has {len(table.items)}",
                )

    @staticmethod
    def _nearest(
        statements: Sequence[Statement], position: int, keyword: Keyword
    ) -> Optional[StringListStatement]:
        """Nearest preceding statement of ``keyword``, else the nearest following one"""
        for index in range(position - 1, -1, -1):
            if statements[index].keyword is keyword:
                return statements[index]
        for index in range(position + 1, len(statements)):
            if statements[index].keyword is keyword:
                return statements[index]
        return None

    def _validate_hierarchy(self, statements: Sequence[Statement]) -> None:
        """Segment ids should be declared .HIERARCHY levels"""
        levels: Set[str] = set()
        for statement in statements:
            if isinstance(statement, Hierarchy):
                levels.update(statement.levels)

        if not levels:
            return
        for statement in statements:
            if isinstance(statement, Segment) and statement.id not in levels:
                self._warning(
                    statement,
                    f"segment level '{statement.id}' is not declared in .HIERARCHY",
                )

    def _validate_dates(self, statements: Sequence[Statement]) -> None:
        for statement in statements:
            if not isinstance(statement, DateStatement):
                continue
            date = statement.date
            if date.month is not None and not 1 <= date.month <= 12:
                self._warning(statement, f"month {date.month} is outside 1-12")
            if date.day is not None and not 1 <= date.day <= 31:
                self._warning(statement, f"day {date.day} is outside 1-31")

    @staticmethod
    def levenshtein_distance(s1: str, s2: str) -> int:
        """
        Calculate Levenshtein distance (edit distance) between two strings.

        Examples:
            levenshtein_distance(".SEGMNT", ".SEGMENT") = 1
            levenshtein_distance(".PEN_DWON", ".PEN_DOWN") = 2
        """
        if len(s1) < len(s2):
            return UniPenValidator.levenshtein_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = range(len(s2) + 1)

        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]

    @staticmethod
    def validate_keyword(word: str, valid_keywords: Set[str]) -> Tuple[bool, Optional[str]]:
        """
        Check if a keyword might be a misspelling of a known one.

        Returns:
            Tuple of (is_valid, suggestion) where:
            - is_valid: True if word is known or too far from any keyword
            - suggestion: Closest known keyword if word is likely a typo

        Examples:
            validate_keyword(".SEGMENT", keywords) -> (True, None)
            validate_keyword(".SEGMNT", keywords) -> (False, ".SEGMENT")
            validate_keyword(".XYZZY", keywords) -> (True, None)
        """
        if word in valid_keywords:
            return True, None

        closest_keyword = None
        min_distance = float('inf')

        for keyword in sorted(valid_keywords):
            distance = UniPenValidator.levenshtein_distance(word, keyword)
            if distance < min_distance:
                min_distance = distance
                closest_keyword = keyword

        if min_distance <= UniPenValidator.MAX_TYPO_DISTANCE:
            return False, closest_keyword

        return True, None
