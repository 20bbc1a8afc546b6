"""
AsmDependencyAnalysis
=====================

High-level entry point: resolves the input file, runs the
:class:`~asm_dependencies.pipeline.scanner.RecursiveScanner` once and turns
the result into a Makefile dependency rule.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from ..models import ResolutionMode, ScanContext, ScanResult
from .dependency_writer import DependencyWriter
from .include_graph import IncludeGraph
from .path_resolver import PathResolver, absolute_path, normalize, relative_path
from .scanner import RecursiveScanner, ScanError

logger = logging.getLogger(__name__)


class AsmDependencyAnalysis:
    """
    Facade over the dependency scanner.

    Parameters
    ----------
    search_paths:
        Extra search directories (``-i``), relative to *working_dir* unless
        absolute.  Directories that do not exist are ignored.
    mode:
        How relative operands are anchored; see
        :class:`~asm_dependencies.models.ResolutionMode`.
    strict:
        Treat a repeated inclusion as a fatal error.
    working_dir:
        Directory that output paths are relative to.  Defaults to the
        process working directory.
    """

    def __init__(
        self,
        search_paths: Iterable[str] = (),
        mode: ResolutionMode = ResolutionMode.ROOT,
        strict: bool = False,
        working_dir: Optional[str] = None,
    ) -> None:
        self.working_dir = normalize(os.path.abspath(working_dir or os.getcwd()))
        self.mode = mode
        self._resolver = PathResolver()
        self._scanner = RecursiveScanner(resolver=self._resolver, strict=strict)
        self.search_paths: List[str] = []
        for path in search_paths:
            resolved = self._resolver.resolve_directory(path, self.working_dir)
            if resolved is None:
                logger.warning("Ignoring missing search path: %s", path)
            elif resolved not in self.search_paths:
                self.search_paths.append(resolved)

    # ------------------------------------------------------------------
    # Primary API
    # ------------------------------------------------------------------

    def analyze_file(self, input_file: str) -> ScanResult:
        """
        Scan *input_file* and everything it references.

        Raises
        ------
        ScanError
            When the input file or any included file cannot be read.
        """
        file_path = absolute_path(input_file, self.working_dir)
        if not Path(file_path).is_file():
            raise ScanError(f'Cannot open "{input_file}" for reading.')

        context = ScanContext(
            root_dir=Path(file_path).parent.as_posix(),
            working_dir=self.working_dir,
            mode=self.mode,
            search_paths=list(self.search_paths),
        )
        graph = IncludeGraph()
        self._scanner.scan(file_path, context, graph)

        for cycle in graph.cycles():
            logger.warning(
                "Include cycle: %s",
                " -> ".join(relative_path(p, self.working_dir) for p in cycle + cycle[:1]),
            )
        if context.missing:
            logger.debug("%d unresolved reference(s)", len(context.missing))

        return ScanResult(
            input_file=file_path,
            dependencies=list(context.dependencies),
            relative_dependencies=[
                relative_path(p, self.working_dir) for p in context.dependencies
            ],
            search_paths=list(context.search_paths),
            missing=list(context.missing),
            graph=graph,
        )

    def make_rule(self, object_file: str, input_file: str) -> str:
        """Return the ``object: deps...`` rule line for *input_file*."""
        return self.writer_for(object_file, self.analyze_file(input_file)).render()

    def writer_for(self, object_file: str, result: ScanResult) -> DependencyWriter:
        writer = DependencyWriter(object_file, self.working_dir)
        writer.extend(result.dependencies)
        return writer
