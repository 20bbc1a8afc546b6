"""
asm_dependencies
================

Scans assembly source for ``incdir``, ``include``, ``incbin`` and
``binclude`` directives and writes a Makefile dependency rule listing every
file the source depends on, in the style of a compiler's ``-M`` output.

Quick start
-----------
>>> from asm_dependencies import AsmDependencyAnalysis
>>> analysis = AsmDependencyAnalysis(search_paths=["include"])
>>> print(analysis.make_rule("main.o", "src/main.asm"), end="")
main.o: src/main.asm include/macros.inc data/font.bin
"""

from .models import Directive, DirectiveAction, MissingReference, ResolutionMode, ScanContext, ScanResult
from .passes.directive_dispatch import DirectiveDispatcher
from .passes.line_tokenizer import LineTokenizer
from .pipeline.asm_analysis import AsmDependencyAnalysis
from .pipeline.dependency_writer import DependencyWriter
from .pipeline.include_graph import IncludeGraph
from .pipeline.path_resolver import PathResolver
from .pipeline.scanner import RecursiveScanner, ScanError

__version__ = "0.1.0"
__all__ = [
    "Directive",
    "DirectiveAction",
    "MissingReference",
    "ResolutionMode",
    "ScanContext",
    "ScanResult",
    "DirectiveDispatcher",
    "LineTokenizer",
    "AsmDependencyAnalysis",
    "DependencyWriter",
    "IncludeGraph",
    "PathResolver",
    "RecursiveScanner",
    "ScanError",
]
