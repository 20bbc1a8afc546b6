"""
DependencyWriter
================

Builds the Makefile rule ``<object>: <dep0> <dep1> ...`` from the
dependencies discovered by a scan.  Paths are written relative to the
working directory with forward slashes, each at most once, in discovery
order.
"""
from __future__ import annotations

from typing import Iterable, List, TextIO

from .path_resolver import relative_path


class DependencyWriter:
    """
    Parameters
    ----------
    object_file:
        Rule target, written verbatim.
    working_dir:
        Directory the dependency paths are made relative to.
    """

    def __init__(self, object_file: str, working_dir: str) -> None:
        self.object_file = object_file
        self.working_dir = working_dir
        self._paths: List[str] = []

    @property
    def paths(self) -> List[str]:
        return list(self._paths)

    def add(self, path: str) -> None:
        relative = relative_path(path, self.working_dir)
        if relative not in self._paths:
            self._paths.append(relative)

    def extend(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.add(path)

    def render(self) -> str:
        return f"{self.object_file}: " + " ".join(self._paths) + "\n"

    def write(self, stream: TextIO) -> None:
        stream.write(self.render())
