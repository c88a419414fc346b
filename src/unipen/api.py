"""
UniPen Public API

High-level functions for reading UniPen data from other projects.
"""

from pathlib import Path
from typing import Optional, Union

from .config import ParserSettings
from .core.document import Document
from .parsers.unipen_parser import UniPenParser

PathLike = Union[str, Path]


def parse(
    path: PathLike,
    include_dir: Optional[PathLike] = None,
    settings: Optional[ParserSettings] = None,
) -> Document:
    """
    Parse a UniPen file into a validated Document.

    Args:
        path: UniPen file to read
        include_dir: Base directory for .INCLUDE statements (required when
                     the file includes others)
        settings: Parser settings (default: user override or packaged defaults)

    Returns:
        Document with every .INCLUDE expanded

    Raises:
        ParseError: syntax, include, read or validation failure

    Example:
        import unipen

        doc = unipen.parse("session.dat", include_dir="corpus/include")
        for segment in doc.query(".SEGMENT"):
            print(segment.id, doc.resolve(segment.members))
    """
    parser = UniPenParser(include_dir=include_dir, settings=settings)
    return parser.parse_file(path)


def parse_string(
    content: str,
    include_dir: Optional[PathLike] = None,
    settings: Optional[ParserSettings] = None,
    source: str = "<string>",
) -> Document:
    """
    Parse UniPen content held in memory.

    Args:
        content: UniPen text
        include_dir: Base directory for .INCLUDE statements
        settings: Parser settings
        source: Name used for this content in error messages

    Returns:
        Document with every .INCLUDE expanded
    """
    parser = UniPenParser(include_dir=include_dir, settings=settings)
    return parser.parse(content, source=None if source == "<string>" else source)
