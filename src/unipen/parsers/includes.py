"""
.INCLUDE resolution

Included files are resolved against one base directory. The files of a parse
session are kept in an arena (one index per opened file); the indices on the
open stack are the files currently being expanded, which is what cycle and
depth checks look at.
"""

from pathlib import Path
from typing import List, Optional

from ..core.models import Include
from ..errors import ErrorContext, IncludeError, IncludeErrorKind


class IncludeGraph:
    """Files opened during one parse session"""

    def __init__(self):
        self.files: List[Optional[Path]] = []
        self.open_stack: List[int] = []

    def open(self, path: Optional[Path]) -> int:
        self.files.append(path)
        index = len(self.files) - 1
        self.open_stack.append(index)
        return index

    def close(self) -> Optional[Path]:
        return self.files[self.open_stack.pop()]

    def is_open(self, path: Path) -> bool:
        return any(self.files[index] == path for index in self.open_stack)

    @property
    def depth(self) -> int:
        """Nesting level of the file being expanded (root is 0)"""
        return len(self.open_stack) - 1


class IncludeResolver:
    """Resolve an .INCLUDE against the base directory and the open stack"""

    def __init__(self, base_dir: Optional[Path], max_depth: int = 64):
        self.base_dir = base_dir
        self.max_depth = max_depth

    @staticmethod
    def error_context(include: Include) -> Optional[ErrorContext]:
        location = include.location
        if location is None:
            return None
        return ErrorContext(location.file, location.line, location.column)

    def resolve(self, include: Include, graph: IncludeGraph) -> Path:
        """
        Canonical path of the included file.

        Raises:
            IncludeError: missing base directory, missing file, cycle or depth limit.
                Names that lead outside the base directory (absolute paths,
                ``..``) count as missing.
        """
        context = self.error_context(include)
        if self.base_dir is None:
            raise IncludeError(
                IncludeErrorKind.MISSING_BASE,
                Path(include.name),
                context,
                "file contains .INCLUDE but no include directory was given",
            )

        base = self.base_dir.resolve()
        path = (base / include.name).resolve()
        try:
            path.relative_to(base)
        except ValueError:
            raise IncludeError(
                IncludeErrorKind.NOT_FOUND, path, context, f"outside include directory {base}"
            ) from None
        if graph.is_open(path):
            raise IncludeError(IncludeErrorKind.CYCLE, path, context)
        if graph.depth + 1 > self.max_depth:
            raise IncludeError(
                IncludeErrorKind.DEPTH_EXCEEDED, path, context, f"limit is {self.max_depth}"
            )
        if not path.is_file():
            raise IncludeError(IncludeErrorKind.NOT_FOUND, path, context)
        return path
