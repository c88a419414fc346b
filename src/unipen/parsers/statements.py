"""
Statement dispatcher

Maps the leading keyword of a statement span to its grammar and builds the
typed statement. The grammar of every built-in keyword lives in the single
GRAMMAR table; keywords that are not built in become CustomStatements.
"""

from typing import Callable, Dict, List, Tuple

from ..core.keywords import KEYWORD_PATTERN, Keyword, normalize_keyword_name
from ..core.models import (
    AgeStatement,
    Comment,
    Coord,
    CustomStatement,
    DateStatement,
    Hierarchy,
    Include,
    KeywordDeclaration,
    LexiconSet,
    LexiconSetEntry,
    NumberListStatement,
    NumberStatement,
    PenStatement,
    RecResult,
    RecTime,
    ReserveDeclaration,
    Segment,
    SetEntry,
    SetStatement,
    SourceLocation,
    StartBox,
    Statement,
    StringListStatement,
    StringStatement,
    TextStatement,
    VocabularyStatement,
)
from ..core.vocabulary import (
    Acceptance,
    CoordinateAxis,
    CustomToken,
    Hand,
    Quality,
    Sex,
    Skill,
    Style,
    TimeUnit,
    TypeMarker,
    Vocabularies,
    VocabularyRegistry,
)
from ..utils.logging import UniPenLogger
from .fields import FieldCursor, is_number
from .scanner import SourceText, StatementSpan

Grammar = Callable[[FieldCursor, Keyword, SourceLocation], Statement]


# Keyword groups sharing one grammar

NUMBER_KEYWORDS = (
    Keyword.VERSION,
    Keyword.X_DIM,
    Keyword.Y_DIM,
    Keyword.X_POINTS_PER_INCH,
    Keyword.Y_POINTS_PER_INCH,
    Keyword.Z_POINTS_PER_INCH,
    Keyword.X_POINTS_PER_MM,
    Keyword.Y_POINTS_PER_MM,
    Keyword.Z_POINTS_PER_MM,
    Keyword.POINTS_PER_GRAM,
    Keyword.POINTS_PER_SECOND,
    Keyword.DT,
)

STRING_KEYWORDS = (
    Keyword.DATA_ID,
    Keyword.LEXICON_ID,
    Keyword.WRITER_ID,
    Keyword.START_SET,
    Keyword.REC_ID,
)

TEXT_KEYWORDS = (
    Keyword.DATA_SOURCE,
    Keyword.DATA_CONTACT,
    Keyword.DATA_INFO,
    Keyword.SETUP,
    Keyword.PAD,
    Keyword.LEXICON_SOURCE,
    Keyword.LEXICON_CONTACT,
    Keyword.LEXICON_INFO,
    Keyword.COUNTRY,
    Keyword.WRITER_INFO,
    Keyword.REC_SOURCE,
    Keyword.REC_CONTACT,
    Keyword.REC_INFO,
    Keyword.IMPLEMENT,
)

NUMBER_LIST_KEYWORDS = (
    Keyword.H_LINE,
    Keyword.V_LINE,
    Keyword.ALPHABET_FREQ,
    Keyword.LEXICON_FREQ,
)

VOCABULARY_BY_KEYWORD = {
    Keyword.STYLE: Style,
    Keyword.HAND: Hand,
    Keyword.SEX: Sex,
    Keyword.SKILL: Skill,
}


# Grammars


def _number(cursor, keyword, location):
    return NumberStatement(keyword, cursor.number(), location)


def _string(cursor, keyword, location):
    return StringStatement(keyword, cursor.string(), location)


def _text(cursor, keyword, location):
    return TextStatement(keyword, cursor.free_text(), location)


def _number_list(cursor, keyword, location):
    return NumberListStatement(keyword, cursor.numbers(), location)


def _string_list(cursor, keyword, location):
    items = []
    while not cursor.at_end():
        items.append(cursor.label_or_string())
    return StringListStatement(keyword, tuple(items), location)


def _pen(cursor, keyword, location):
    return PenStatement(keyword, cursor.number_rows(), location)


def _vocabulary(cursor, keyword, location):
    return VocabularyStatement(keyword, cursor.reserved(VOCABULARY_BY_KEYWORD[keyword]), location)


def _coord(cursor, keyword, location):
    axes = [cursor.reserved(CoordinateAxis)]
    while not cursor.at_end():
        axes.append(cursor.reserved(CoordinateAxis))
    return Coord(tuple(axes), location)


def _hierarchy(cursor, keyword, location):
    levels = [cursor.string("hierarchy level")]
    levels.extend(cursor.strings())
    return Hierarchy(tuple(levels), location)


def _date(cursor, keyword, location):
    return DateStatement(cursor.date(), location)


def _age(cursor, keyword, location):
    return AgeStatement(cursor.age(), location)


def _segment(cursor, keyword, location):
    segment_id = cursor.string("segment hierarchy level")
    members = cursor.component_list()
    quality = None if cursor.at_end() else cursor.reserved(Quality)
    label = None if cursor.at_end() else cursor.label()
    return Segment(segment_id, members, quality, label, location)


def _start_box(cursor, keyword, location):
    return StartBox(location)


def _set(cursor, keyword, location):
    entries: List[SetEntry] = []
    while not entries or not cursor.at_end():
        entries.append(
            SetEntry(
                file=cursor.string("file name"),
                set_name=cursor.string("set name"),
                hierarchy=cursor.string("hierarchy level"),
                members=cursor.component_list(),
            )
        )
    return SetStatement(keyword, tuple(entries), location)


def _lexicon_set(cursor, keyword, location):
    entries: List[LexiconSetEntry] = []
    while not entries or not cursor.at_end():
        entries.append(
            LexiconSetEntry(
                lexicon=cursor.string("lexicon id"),
                hierarchy=cursor.string("hierarchy level"),
                members=cursor.component_list(),
            )
        )
    return LexiconSet(tuple(entries), location)


def _rec_time(cursor, keyword, location):
    rec_id = cursor.string("hierarchy level")
    members = cursor.component_list()
    time = cursor.number("recognition time")
    unit = None if cursor.at_end() else cursor.reserved(TimeUnit)
    return RecTime(rec_id, members, time, unit, location)


def _rec_result(cursor, keyword, location):
    rec_id = cursor.string("hierarchy level")
    members = cursor.component_list()
    token = cursor.peek_token()
    if token is not None and is_number(token):
        decision = cursor.number()
    else:
        decision = cursor.reserved(Acceptance)
    labels = cursor.labels(minimum=1)
    return RecResult(keyword, rec_id, members, decision, labels, location)


def _keyword_declaration(cursor, keyword, location):
    expected = "keyword name"
    raw = cursor.peek_token()
    name = normalize_keyword_name(cursor.string(expected))
    if not KEYWORD_PATTERN.fullmatch(name):
        raise cursor.error(expected, at=cursor.pos - len(raw), found=raw)
    type_marker = TypeMarker.FREE_TEXT
    token = cursor.peek_token()
    if token is not None and Vocabularies.lookup(TypeMarker, token) is not None:
        type_marker = cursor.reserved(TypeMarker)
    return KeywordDeclaration(name, type_marker, cursor.free_text(), location)


def _reserve_declaration(cursor, keyword, location):
    token = cursor.string("reserved word")
    return ReserveDeclaration(token, cursor.free_text(), location)


def _include(cursor, keyword, location):
    return Include(cursor.string("include file name"), location)


def _comment(cursor, keyword, location):
    return Comment(cursor.free_text(), location)


GRAMMAR: Dict[Keyword, Grammar] = {
    **dict.fromkeys(NUMBER_KEYWORDS, _number),
    **dict.fromkeys(STRING_KEYWORDS, _string),
    **dict.fromkeys(TEXT_KEYWORDS, _text),
    **dict.fromkeys(NUMBER_LIST_KEYWORDS, _number_list),
    **dict.fromkeys(VOCABULARY_BY_KEYWORD, _vocabulary),
    **dict.fromkeys((Keyword.ALPHABET, Keyword.LEXICON), _string_list),
    **dict.fromkeys((Keyword.PEN_DOWN, Keyword.PEN_UP), _pen),
    **dict.fromkeys((Keyword.TRAINING_SET, Keyword.TEST_SET, Keyword.ADAPT_SET), _set),
    **dict.fromkeys((Keyword.REC_LABELS, Keyword.REC_SCORES), _rec_result),
    Keyword.COORD: _coord,
    Keyword.HIERARCHY: _hierarchy,
    Keyword.DATE: _date,
    Keyword.AGE: _age,
    Keyword.SEGMENT: _segment,
    Keyword.START_BOX: _start_box,
    Keyword.LEXICON_SET: _lexicon_set,
    Keyword.REC_TIME: _rec_time,
    Keyword.KEYWORD: _keyword_declaration,
    Keyword.RESERVE: _reserve_declaration,
    Keyword.INCLUDE: _include,
    Keyword.COMMENT: _comment,
}


class StatementDispatcher:
    """Turn the spans of one source into typed statements"""

    def __init__(self, source: SourceText, registry: VocabularyRegistry):
        self.source = source
        self.registry = registry

    def dispatch(self, span: StatementSpan) -> Statement:
        cursor = FieldCursor(span, self.source, self.registry)
        literal = cursor.keyword()
        location = SourceLocation(self.source.path, span.line, span.column)

        keyword = Keyword.from_literal(literal)
        if keyword is None:
            statement = self._custom(cursor, literal, location)
        else:
            statement = GRAMMAR[keyword](cursor, keyword, location)
        cursor.expect_end()

        if isinstance(statement, KeywordDeclaration):
            declared = statement.type if isinstance(statement.type, TypeMarker) else TypeMarker.FREE_TEXT
            self.registry.declare_keyword(statement.name, declared)
            UniPenLogger.debug(f"Declared keyword {statement.name} ({declared.value})")
        elif isinstance(statement, ReserveDeclaration):
            self.registry.declare_token(statement.token, statement.text)
            UniPenLogger.debug(f"Declared reserved word {statement.token}")
        return statement

    def _custom(self, cursor: FieldCursor, literal: str, location: SourceLocation) -> CustomStatement:
        """Body of a non built-in keyword, typed when it was declared before use"""
        declared = self.registry.keyword_type(literal)
        if declared is TypeMarker.NUMBER:
            value: Tuple = cursor.numbers()
        elif declared is TypeMarker.STRING:
            value = cursor.strings()
        elif declared is TypeMarker.LABEL:
            value = cursor.labels()
        elif declared is TypeMarker.COMPONENTS:
            lists = []
            while not cursor.at_end():
                lists.append(cursor.component_list())
            value = tuple(lists)
        elif declared is TypeMarker.RESERVED:
            value = self._custom_tokens(cursor)
        else:
            return CustomStatement(literal, cursor.free_text(), declared, location)
        return CustomStatement(literal, value, declared, location)

    def _custom_tokens(self, cursor: FieldCursor) -> Tuple[CustomToken, ...]:
        tokens = []
        while not cursor.at_end():
            start = cursor.pos
            token = cursor.string("reserved word")
            if not self.registry.has_token(token):
                raise cursor.error("reserved word declared by .RESERVE", at=start, found=token)
            tokens.append(CustomToken(token))
        return tuple(tokens)
