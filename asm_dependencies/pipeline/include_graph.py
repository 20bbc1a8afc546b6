"""
IncludeGraph
============

Directed graph of the inclusions found during a scan, kept in a
:class:`networkx.DiGraph`.

Nodes are absolute file paths.  Each edge carries a ``kind`` attribute:
``"include"`` for a textual inclusion (the target was scanned) or
``"binary"`` for ``incbin`` / ``binclude`` (the target is a leaf).  Edges to
files that were already scanned are kept, so include cycles stay visible
even though the scanner never walks them twice.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Set

import networkx as nx

from .path_resolver import relative_path

INCLUDE_EDGE = "include"
BINARY_EDGE = "binary"


class IncludeGraph:
    """Tracks which file pulled in which."""

    def __init__(self) -> None:
        self._graph = nx.DiGraph()

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def add_file(self, path: str) -> None:
        self._graph.add_node(path)

    def add_include(self, src: str, dest: str) -> None:
        """Record that *src* textually includes *dest*."""
        self._graph.add_edge(src, dest, kind=INCLUDE_EDGE)

    def add_binary(self, src: str, dest: str) -> None:
        """Record that *src* binary-includes *dest*."""
        self._graph.add_edge(src, dest, kind=BINARY_EDGE)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __contains__(self, path: str) -> bool:
        return path in self._graph

    def files(self) -> Set[str]:
        return set(self._graph.nodes)

    def direct_dependencies(self, path: str, kind: Optional[str] = None) -> Set[str]:
        """Files that *path* references directly, optionally of one edge kind."""
        if path not in self._graph:
            return set()
        return {
            dest
            for _, dest, data in self._graph.out_edges(path, data=True)
            if kind is None or data["kind"] == kind
        }

    def all_dependencies(self, path: str) -> Set[str]:
        """Transitive closure of the files reachable from *path*."""
        if path not in self._graph:
            return set()
        return set(nx.descendants(self._graph, path))

    def cycles(self) -> List[List[str]]:
        """Every elementary include cycle, each as a list of paths."""
        return [list(cycle) for cycle in nx.simple_cycles(self._graph)]

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_dict(self, working_dir: Optional[str] = None) -> Dict[str, Any]:
        def name(path: str) -> str:
            return relative_path(path, working_dir) if working_dir else path

        return {
            "files": sorted(name(node) for node in self._graph.nodes),
            "dependencies": {
                name(node): {
                    "includes": sorted(name(d) for d in self.direct_dependencies(node, INCLUDE_EDGE)),
                    "binaries": sorted(name(d) for d in self.direct_dependencies(node, BINARY_EDGE)),
                    "all": sorted(name(d) for d in self.all_dependencies(node)),
                }
                for node in sorted(self._graph.nodes)
            },
            "edges": sorted(
                (
                    {"src": name(src), "dest": name(dest), "kind": data["kind"]}
                    for src, dest, data in self._graph.edges(data=True)
                ),
                key=lambda edge: (edge["src"], edge["dest"]),
            ),
        }
