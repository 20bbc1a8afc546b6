"""
PathResolver
============

Locates the file or directory named by a directive operand.

Candidate directories, first existing match wins:

1. the parent directory of the reference
   (see :class:`~asm_dependencies.models.ResolutionMode`);
2. the working directory, in ``RELATIVE`` mode only;
3. every registered search path, in registration order.

Operands with a root component are used as they are.  All returned paths
are absolute, lexically normalised and use forward slashes.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from ..models import ResolutionMode, ScanContext

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Path-string helpers
# ---------------------------------------------------------------------------


def to_posix(path: str) -> str:
    """Replace backslashes with forward slashes."""
    return path.replace("\\", "/")


def normalize(path: str) -> str:
    """Collapse ``.``/``..`` and duplicate separators; forward slashes only."""
    return to_posix(os.path.normpath(to_posix(path)))


def absolute_path(path: str, parent_dir: str) -> str:
    """Anchor *path* at *parent_dir* unless it already has a root."""
    path = to_posix(path)
    if not os.path.isabs(path):
        path = os.path.join(parent_dir, path)
    return normalize(path)


def relative_path(path: str, working_dir: str) -> str:
    """*path* relative to *working_dir*, with forward slashes."""
    try:
        return to_posix(os.path.relpath(path, working_dir))
    except ValueError:
        # Different drives on Windows have no relative form.
        return normalize(path)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class PathResolver:
    """Resolves directive operands against a :class:`ScanContext`."""

    def candidates(self, operand: str, context: ScanContext, parent_dir: str) -> List[str]:
        """Return the absolute paths tried for *operand*, in priority order."""
        operand = to_posix(operand)
        if os.path.isabs(operand):
            return [normalize(operand)]

        bases = [parent_dir]
        if context.mode is ResolutionMode.RELATIVE:
            bases.append(context.working_dir)
        bases.extend(context.search_paths)

        result: List[str] = []
        for base in bases:
            candidate = absolute_path(operand, base)
            if candidate not in result:
                result.append(candidate)
        return result

    def resolve_file(self, operand: str, context: ScanContext, parent_dir: str) -> Optional[str]:
        """
        Find the regular file named by *operand*.

        Returns
        -------
        str | None
            Normalised absolute path of the first match, or *None*.
        """
        for candidate in self.candidates(operand, context, parent_dir):
            if Path(candidate).is_file():
                return candidate
        logger.debug("Could not resolve %r from %s", operand, parent_dir)
        return None

    def resolve_directory(self, operand: str, parent_dir: str) -> Optional[str]:
        """Absolute form of a search directory, or *None* if it does not exist."""
        path = absolute_path(operand, parent_dir)
        if Path(path).is_dir():
            return path
        logger.debug("Search path %r does not exist (from %s)", operand, parent_dir)
        return None
