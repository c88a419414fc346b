"""
UniPen - Reader for the UniPen on-line handwriting format

This package parses, validates and queries UniPen files: pen trajectories,
writer metadata, segmentations and recognition results, with recursive
.INCLUDE resolution.
"""

__version__ = "1.0.0"

# Import high-level API functions
from .api import parse, parse_string
from .config import DataManager, ParserSettings, get_data_manager, load_settings
from .core.document import Document
from .core.keywords import Keyword
from .core.models import (
    Age,
    Component,
    Date,
    PenStatement,
    Range,
    Segment,
    SourceLocation,
    Statement,
)
from .core.vocabulary import (
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
)
from .errors import (
    ErrorContext,
    IncludeError,
    IncludeErrorKind,
    ParseError,
    ReadError,
    UniPenSyntaxError,
    UniPenValidationError,
    ValidationIssue,
)
from .parsers.unipen_parser import UniPenParser
from .writers.unipen_writer import UniPenWriter

# Public API
__all__ = [
    # Version
    "__version__",
    # Entry points
    "parse",
    "parse_string",
    "UniPenParser",
    "UniPenWriter",
    "write_unipen",
    # Document model
    "Document",
    "Keyword",
    "Statement",
    "PenStatement",
    "Segment",
    "Component",
    "Range",
    "Date",
    "Age",
    "SourceLocation",
    # Vocabularies
    "CoordinateAxis",
    "Style",
    "Hand",
    "Sex",
    "Skill",
    "Quality",
    "Acceptance",
    "TimeUnit",
    "TypeMarker",
    "CustomToken",
    # Errors
    "ParseError",
    "UniPenSyntaxError",
    "UniPenValidationError",
    "ValidationIssue",
    "IncludeError",
    "IncludeErrorKind",
    "ReadError",
    "ErrorContext",
    # Configuration
    "ParserSettings",
    "DataManager",
    "get_data_manager",
    "load_settings",
]


def write_unipen(document: Document) -> str:
    """Write a Document back to UniPen text

    Args:
        document: Parsed Document

    Returns:
        UniPen format string
    """
    return UniPenWriter().write(document)
