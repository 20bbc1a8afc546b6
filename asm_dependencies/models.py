"""
Core data models for the assembly dependency scanner.

Plain dataclasses shared by the tokenizer, the dispatcher, the resolver and
the recursive scanner.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Set


# ---------------------------------------------------------------------------
# Directive keywords
# ---------------------------------------------------------------------------

INCDIR = "incdir"
INCLUDE = "include"
INCBIN = "incbin"
BINCLUDE = "binclude"

DIRECTIVE_KEYWORDS = frozenset({INCDIR, INCLUDE, INCBIN, BINCLUDE})


class DirectiveAction(Enum):
    """What the scanner does with a recognised directive line."""

    ADD_SEARCH_PATH = "add_search_path"  # incdir
    INCLUDE = "include"                  # recurse into the file
    BINARY = "binary"                    # incbin / binclude, leaf dependency
    IGNORE = "ignore"                    # anything else


class ResolutionMode(Enum):
    """
    How the parent directory used for relative operands is chosen.

    ``ROOT``
        Every operand is resolved against the input file's directory for
        the whole run.
    ``RELATIVE``
        Operands are resolved against the directory of the file currently
        being scanned, then against the working directory.
    """

    ROOT = "root"
    RELATIVE = "relative"


@dataclass
class Directive:
    """A directive keyword and its (unquoted) operand taken from one line."""

    keyword: str
    operand: str

    def __repr__(self) -> str:
        return f"Directive(keyword={self.keyword!r}, operand={self.operand!r})"


@dataclass
class TokenizedLine:
    """Result of tokenizing one source line."""

    tokens: List[str]
    label: Optional[str] = None

    @property
    def directive(self) -> Optional[Directive]:
        # A directive needs both a keyword and an operand; extra tokens are dropped.
        if len(self.tokens) < 2:
            return None
        return Directive(keyword=self.tokens[0].lower(), operand=self.tokens[1])


# ---------------------------------------------------------------------------
# Scan state
# ---------------------------------------------------------------------------


@dataclass
class MissingReference:
    """
    A directive operand that did not resolve to an existing file or
    directory.  Recorded for reporting only; never fatal.
    """

    keyword: str
    operand: str
    referenced_from_file: str
    line_number: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "operand": self.operand,
            "referenced_from_file": self.referenced_from_file,
            "line_number": self.line_number,
        }

    def __str__(self) -> str:
        name = Path(self.referenced_from_file).name
        return f"{self.keyword} {self.operand!r} ({name}:{self.line_number})"


@dataclass
class ScanContext:
    """
    Mutable state shared by every level of one recursive scan.

    ``search_paths`` is an insertion-ordered unique list; a directory added
    by ``incdir`` in any file is consulted for every later lookup in the run.
    """

    root_dir: str
    working_dir: str
    mode: ResolutionMode = ResolutionMode.ROOT
    search_paths: List[str] = field(default_factory=list)
    visited: Set[str] = field(default_factory=set)
    dependencies: List[str] = field(default_factory=list)
    missing: List[MissingReference] = field(default_factory=list)

    def add_search_path(self, path: str) -> bool:
        """Register *path*; return False when it was already known."""
        if path in self.search_paths:
            return False
        self.search_paths.append(path)
        return True

    def add_dependency(self, path: str) -> bool:
        """Append *path* to the dependency list unless it is already there."""
        if path in self.dependencies:
            return False
        self.dependencies.append(path)
        return True

    def parent_for(self, file_path: str) -> str:
        """Directory used to resolve operands found inside *file_path*."""
        if self.mode is ResolutionMode.RELATIVE:
            return Path(file_path).parent.as_posix()
        return self.root_dir


@dataclass
class ScanResult:
    """Everything one run of the scanner discovered."""

    input_file: str
    dependencies: List[str]
    relative_dependencies: List[str]
    search_paths: List[str]
    missing: List[MissingReference]
    graph: Any = None

    def __repr__(self) -> str:
        return (
            f"ScanResult(input_file={self.input_file!r}, "
            f"dependencies={self.relative_dependencies})"
        )
