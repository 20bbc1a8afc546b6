"""
RecursiveScanner
================

Walks an assembly source file line by line and follows its directives:

* ``incdir``   adds a directory to the run's search paths.  The addition is
  visible to every later lookup, in this file and in all files scanned
  afterwards.
* ``include``  resolves the operand and scans that file depth-first.
* ``incbin`` / ``binclude`` resolve the operand and record it as a leaf
  dependency; the file is never opened.

Unresolvable operands are recorded on the context and skipped.  A file that
cannot be opened aborts the whole run with :class:`ScanError`.

Each file is scanned at most once.  A repeated inclusion (diamond or cycle)
is skipped, or rejected with :class:`ScanError` when the scanner is strict.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..models import DirectiveAction, MissingReference, ScanContext
from ..passes.directive_dispatch import DirectiveDispatcher
from ..passes.line_tokenizer import LineTokenizer
from .include_graph import IncludeGraph
from .path_resolver import PathResolver, relative_path

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Fatal scan failure; the dependency rule cannot be produced."""


class RecursiveScanner:
    """
    Depth-first directive scanner.

    Parameters
    ----------
    resolver, tokenizer, dispatcher:
        Collaborators; defaults are created when omitted.
    strict:
        Raise :class:`ScanError` when an already scanned file is included
        again instead of skipping it.
    """

    def __init__(
        self,
        resolver: Optional[PathResolver] = None,
        tokenizer: Optional[LineTokenizer] = None,
        dispatcher: Optional[DirectiveDispatcher] = None,
        strict: bool = False,
    ) -> None:
        self._resolver = resolver or PathResolver()
        self._tokenizer = tokenizer or LineTokenizer()
        self._dispatcher = dispatcher or DirectiveDispatcher()
        self.strict = strict

    def scan(self, file_path: str, context: ScanContext, graph: IncludeGraph) -> None:
        """
        Scan *file_path* and everything it includes.

        Parameters
        ----------
        file_path:
            Normalised absolute path of an existing source file.
        context:
            Shared run state; extended in place.
        graph:
            Receives one node per file and one edge per resolved reference.
        """
        shown = relative_path(file_path, context.working_dir)

        if file_path in context.visited:
            if self.strict:
                raise ScanError(f'Multiple inclusions of "{shown}" found.')
            logger.debug("Already scanned, skipping: %s", shown)
            return

        context.visited.add(file_path)
        context.add_dependency(file_path)
        graph.add_file(file_path)
        parent_dir = context.parent_for(file_path)

        logger.info("Scanning: %s", shown)
        try:
            source = open(file_path, "r", encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ScanError(f'Cannot open "{shown}" for reading.') from exc

        with source:
            for line_number, line in enumerate(source, start=1):
                self._process_line(line, line_number, file_path, parent_dir, context, graph)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _process_line(
        self,
        line: str,
        line_number: int,
        file_path: str,
        parent_dir: str,
        context: ScanContext,
        graph: IncludeGraph,
    ) -> None:
        directive = self._tokenizer.run(line).directive
        action = self._dispatcher.run(directive)
        if action is DirectiveAction.IGNORE:
            return

        logger.debug("%s:%d: %s", file_path, line_number, directive)

        if action is DirectiveAction.ADD_SEARCH_PATH:
            search_path = self._resolver.resolve_directory(directive.operand, parent_dir)
            if search_path is None:
                self._record_missing(directive, file_path, line_number, context)
            elif context.add_search_path(search_path):
                logger.debug("Added search path: %s", search_path)
            return

        found = self._resolver.resolve_file(directive.operand, context, parent_dir)
        if found is None:
            self._record_missing(directive, file_path, line_number, context)
            return

        if action is DirectiveAction.INCLUDE:
            graph.add_include(file_path, found)
            self.scan(found, context, graph)
        else:
            graph.add_binary(file_path, found)
            context.add_dependency(found)

    @staticmethod
    def _record_missing(directive, file_path, line_number, context) -> None:
        context.missing.append(
            MissingReference(
                keyword=directive.keyword,
                operand=directive.operand,
                referenced_from_file=file_path,
                line_number=line_number,
            )
        )
