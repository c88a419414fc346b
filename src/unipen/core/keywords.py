"""
Built-in UniPen keywords

The Enum value is the exact, case-sensitive literal that opens a statement.
"""

import re
from enum import Enum
from typing import Optional


KEYWORD_PATTERN = re.compile(r"\.[A-Za-z0-9_]+")


class Keyword(Enum):
    # Declarations
    KEYWORD = ".KEYWORD"
    RESERVE = ".RESERVE"
    COMMENT = ".COMMENT"
    INCLUDE = ".INCLUDE"

    # Mandatory declarations
    VERSION = ".VERSION"
    DATA_SOURCE = ".DATA_SOURCE"
    DATA_ID = ".DATA_ID"
    COORD = ".COORD"
    HIERARCHY = ".HIERARCHY"

    # Data documentation
    DATA_CONTACT = ".DATA_CONTACT"
    DATA_INFO = ".DATA_INFO"
    SETUP = ".SETUP"
    PAD = ".PAD"

    # Alphabet and lexicon
    ALPHABET = ".ALPHABET"
    ALPHABET_FREQ = ".ALPHABET_FREQ"
    LEXICON_SOURCE = ".LEXICON_SOURCE"
    LEXICON_ID = ".LEXICON_ID"
    LEXICON_CONTACT = ".LEXICON_CONTACT"
    LEXICON_INFO = ".LEXICON_INFO"
    LEXICON = ".LEXICON"
    LEXICON_FREQ = ".LEXICON_FREQ"

    # Data layout
    X_DIM = ".X_DIM"
    Y_DIM = ".Y_DIM"
    H_LINE = ".H_LINE"
    V_LINE = ".V_LINE"

    # Unit system
    X_POINTS_PER_INCH = ".X_POINTS_PER_INCH"
    Y_POINTS_PER_INCH = ".Y_POINTS_PER_INCH"
    Z_POINTS_PER_INCH = ".Z_POINTS_PER_INCH"
    X_POINTS_PER_MM = ".X_POINTS_PER_MM"
    Y_POINTS_PER_MM = ".Y_POINTS_PER_MM"
    Z_POINTS_PER_MM = ".Z_POINTS_PER_MM"
    POINTS_PER_GRAM = ".POINTS_PER_GRAM"
    POINTS_PER_SECOND = ".POINTS_PER_SECOND"

    # Pen trajectory
    PEN_DOWN = ".PEN_DOWN"
    PEN_UP = ".PEN_UP"
    DT = ".DT"

    # Writer and style
    DATE = ".DATE"
    STYLE = ".STYLE"
    WRITER_ID = ".WRITER_ID"
    COUNTRY = ".COUNTRY"
    HAND = ".HAND"
    AGE = ".AGE"
    SEX = ".SEX"
    SKILL = ".SKILL"
    WRITER_INFO = ".WRITER_INFO"

    # Segmentation
    SEGMENT = ".SEGMENT"
    START_SET = ".START_SET"
    START_BOX = ".START_BOX"

    # Recognizer documentation and results
    REC_SOURCE = ".REC_SOURCE"
    REC_ID = ".REC_ID"
    REC_CONTACT = ".REC_CONTACT"
    REC_INFO = ".REC_INFO"
    IMPLEMENT = ".IMPLEMENT"
    TRAINING_SET = ".TRAINING_SET"
    TEST_SET = ".TEST_SET"
    ADAPT_SET = ".ADAPT_SET"
    LEXICON_SET = ".LEXICON_SET"
    REC_TIME = ".REC_TIME"
    REC_LABELS = ".REC_LABELS"
    REC_SCORES = ".REC_SCORES"

    @classmethod
    def from_literal(cls, literal: str) -> Optional["Keyword"]:
        """Return the built-in keyword for ``literal``, or None if it is not built in"""
        try:
            return cls(literal)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        """Literal without the leading dot, e.g. ``WRITER_ID``"""
        return self.value[1:]


def normalize_keyword_name(name: str) -> str:
    """Keywords may be declared with or without the leading dot"""
    return name if name.startswith(".") else "." + name
