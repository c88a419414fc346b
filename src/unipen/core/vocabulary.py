"""
Reserved vocabularies for UniPen statements

Each vocabulary is a closed Enum whose values are the literal tokens that may
appear at one grammar position. ``?`` is the UniPen "unknown" token.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Type


class CoordinateAxis(Enum):
    """Channels that may be declared by .COORD"""
    X = "X"
    Y = "Y"
    TIME = "T"
    PRESSURE = "P"
    Z = "Z"
    BUTTON = "B"
    RHO = "RHO"
    THETA = "THETA"
    PHI = "PHI"


class Style(Enum):
    PRINTED = "PRINTED"
    CURSIVE = "CURSIVE"
    MIXED = "MIXED"
    UNKNOWN = "?"


class Hand(Enum):
    LEFT = "L"
    RIGHT = "R"
    UNKNOWN = "?"


class Sex(Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "?"


class Skill(Enum):
    BAD = "BAD"
    OK = "OK"
    GOOD = "GOOD"
    UNKNOWN = "?"


class Quality(Enum):
    """Segmentation quality of a .SEGMENT"""
    BAD = "BAD"
    OK = "OK"
    GOOD = "GOOD"
    UNKNOWN = "?"


class Acceptance(Enum):
    """Recognizer decision in .REC_LABELS / .REC_SCORES"""
    ACCEPT = "ACCEPT"
    REJECT = "REJECT"
    UNKNOWN = "?"


class TimeUnit(Enum):
    MSEC = "MSEC"
    SEC = "SEC"
    UNKNOWN = "?"


class TypeMarker(Enum):
    """Argument type of a keyword declared with .KEYWORD"""
    NUMBER = "N"
    STRING = "S"
    FREE_TEXT = "F"
    LABEL = "L"
    RESERVED = "R"
    COMPONENTS = "C"
    UNKNOWN = "?"


@dataclass(frozen=True)
class CustomToken:
    """A reserved word declared by .RESERVE"""
    name: str

    @property
    def value(self) -> str:
        return self.name


class VocabularyRegistry:
    """
    Keywords and reserved words declared by .KEYWORD / .RESERVE.

    One registry lives for one parse session (root file plus includes) and
    only grows in textual order.
    """

    def __init__(self):
        self.keywords: Dict[str, TypeMarker] = {}
        self.tokens: Dict[str, str] = {}

    def declare_keyword(self, name: str, type_marker: TypeMarker) -> None:
        self.keywords[name] = type_marker

    def declare_token(self, token: str, description: str = "") -> None:
        self.tokens[token] = description

    def keyword_type(self, name: str) -> Optional[TypeMarker]:
        return self.keywords.get(name)

    def has_token(self, token: str) -> bool:
        return token in self.tokens


class Vocabularies:
    """Lookup helpers used by the field parsers"""

    @staticmethod
    def lookup(vocabulary: Type[Enum], token: str) -> Optional[Enum]:
        """Return the member whose literal is ``token``, or None"""
        try:
            return vocabulary(token)
        except ValueError:
            return None

    @staticmethod
    def describe(vocabulary: Type[Enum]) -> str:
        """Expected-set text for error messages, e.g. ``{BAD, OK, GOOD, ?}``"""
        literals = [member.value for member in vocabulary]
        return "{" + ", ".join(literals) + "}"

