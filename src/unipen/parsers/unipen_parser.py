"""
UniPen Parser Module

Drives the pipeline: boundary scanning, statement dispatch, include
expansion and document validation.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..config import ParserSettings, load_settings
from ..core.document import Document
from ..core.models import Comment, Include, Statement
from ..core.vocabulary import VocabularyRegistry
from ..errors import IncludeError, IncludeErrorKind, ReadError, UniPenValidationError
from ..utils.logging import UniPenLogger
from ..utils.unipen_validator import UniPenValidator
from .includes import IncludeGraph, IncludeResolver
from .scanner import BoundaryScanner, SourceText
from .statements import StatementDispatcher

PathLike = Union[str, Path]


class ParseSession:
    """State of one root parse: declared vocabulary and open include files"""

    def __init__(self, settings: ParserSettings, include_dir: Optional[Path]):
        self.settings = settings
        self.registry = VocabularyRegistry()
        self.graph = IncludeGraph()
        self.resolver = IncludeResolver(include_dir, settings.max_include_depth)

    def open(self, source: SourceText, canonical: Optional[Path]) -> Iterator[Statement]:
        """Register the file and return its lazily dispatched statements"""
        self.graph.open(canonical)
        dispatcher = StatementDispatcher(source, self.registry)
        return (dispatcher.dispatch(span) for span in BoundaryScanner(source).scan())


class UniPenParser:
    """Parse UniPen files into validated Documents"""

    def __init__(
        self,
        include_dir: Optional[PathLike] = None,
        settings: Optional[ParserSettings] = None,
    ):
        self.include_dir = Path(include_dir) if include_dir is not None else None
        self.settings = settings if settings is not None else load_settings()

    def parse_file(self, filepath: PathLike) -> Document:
        """Parse a UniPen file"""
        path = Path(filepath)
        try:
            content = path.read_text(encoding=self.settings.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(path, str(e)) from e
        return self._run(SourceText(content, path), path.resolve())

    def parse(self, content: str, source: Optional[PathLike] = None) -> Document:
        """Parse UniPen content; ``source`` only names it in error messages"""
        return self._run(SourceText(content, Path(source) if source else None), None)

    def _run(self, root: SourceText, canonical: Optional[Path]) -> Document:
        session = ParseSession(self.settings, self.include_dir)
        UniPenLogger.debug(f"Parsing statements from {root.path or '<string>'}")
        statements = self._expand(session, root, canonical)
        UniPenLogger.debug(f"Finished parsing {len(statements)} statements")

        validator = UniPenValidator(
            strict_ranges=self.settings.strict_ranges,
            strict_component_refs=self.settings.strict_component_refs,
        )
        errors, warnings = validator.validate_document(statements)

        if warnings:
            UniPenLogger.warning(f"UniPen validation warnings ({len(warnings)}):")
            for warning in warnings:
                UniPenLogger.warning(f"  • {warning.format()}")

        if errors:
            raise UniPenValidationError(errors)

        files = [path for path in session.graph.files if path is not None]
        return Document(statements, files=files, warnings=[w.format() for w in warnings])

    def _expand(self, session: ParseSession, root: SourceText, canonical: Optional[Path]) -> List[Statement]:
        """Statements of the root file with every .INCLUDE spliced in place"""
        statements: List[Statement] = []
        stack = [session.open(root, canonical)]

        while stack:
            statement = next(stack[-1], None)
            if statement is None:
                closed = session.graph.close()
                stack.pop()
                UniPenLogger.debug(f"Finished {closed or '<string>'}")
                continue

            if isinstance(statement, Include):
                path = session.resolver.resolve(statement, session.graph)
                UniPenLogger.debug(f"Including {path}")
                stack.append(session.open(SourceText(self._read_include(path, statement), path), path))
            elif not isinstance(statement, Comment):
                statements.append(statement)

        return statements

    def _read_include(self, path: Path, include: Include) -> str:
        try:
            return path.read_text(encoding=self.settings.encoding)
        except UnicodeDecodeError as e:
            raise ReadError(path, str(e)) from e
        except OSError as e:
            raise IncludeError(
                IncludeErrorKind.NOT_FOUND, path, IncludeResolver.error_context(include), str(e)
            ) from e
