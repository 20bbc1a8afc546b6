"""
make-asm-dependencies – command-line interface
==============================================

Usage
-----
::

    python -m asm_dependencies.cli -o OUTPUT OBJECT [-i DIR]... INPUT

Options
-------
-o OUTPUT OBJECT   Output file (``-`` for stdout) and the rule's object file.
-i DIR             Add a search path (repeatable).
--relative         Resolve operands against the including file's directory.
--strict           Fail when a file is included more than once.
--graph FILE       Write the include graph to FILE as JSON.
--missing-log FILE Write unresolved references to FILE as JSON.
--verbose, -v      Enable DEBUG logging.

Examples
--------
::

    make-asm-dependencies -o build/main.d build/main.o -i include src/main.asm
    make-asm-dependencies -o - main.o --relative src/main.asm
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .models import ResolutionMode
from .pipeline.asm_analysis import AsmDependencyAnalysis
from .pipeline.scanner import ScanError


class _SetOnce(argparse.Action):
    """Store the value, rejecting a second occurrence of the option."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest) is not None:
            parser.error(f"{option_string} already defined")
        setattr(namespace, self.dest, values)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="make-asm-dependencies",
        description="Write a Makefile dependency rule for an assembly source file",
    )
    p.add_argument("input", help="Assembly source file to scan")
    p.add_argument(
        "-o",
        dest="output",
        nargs=2,
        action=_SetOnce,
        required=True,
        metavar=("OUTPUT", "OBJECT"),
        help="Output file (- for stdout) and object file named in the rule",
    )
    p.add_argument(
        "-i",
        dest="search_paths",
        action="append",
        default=[],
        metavar="DIR",
        help="Add a search path (may be repeated)",
    )
    p.add_argument(
        "--relative",
        action="store_true",
        help=(
            "Resolve operands against the directory of the file that contains "
            "them, then the working directory, instead of the input file's directory"
        ),
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail when the same file is included more than once",
    )
    p.add_argument(
        "--graph",
        default="",
        metavar="FILE",
        help="Write the include graph to FILE as JSON",
    )
    p.add_argument(
        "--missing-log",
        default="",
        metavar="FILE",
        help="Write unresolved include/incbin/incdir references to FILE as JSON",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    output_file, object_file = args.output
    analysis = AsmDependencyAnalysis(
        search_paths=args.search_paths,
        mode=ResolutionMode.RELATIVE if args.relative else ResolutionMode.ROOT,
        strict=args.strict,
    )

    try:
        result = analysis.analyze_file(args.input)
        rule = analysis.writer_for(object_file, result).render()

        if output_file == "-":
            sys.stdout.write(rule)
        else:
            try:
                with open(output_file, "w", encoding="utf-8", newline="\n") as out:
                    out.write(rule)
            except OSError as exc:
                raise ScanError(f'Cannot open "{output_file}" for writing.') from exc

        if args.graph:
            Path(args.graph).write_text(
                json.dumps(result.graph.to_dict(analysis.working_dir), indent=2),
                encoding="utf-8",
            )
        if args.missing_log:
            log_data = {
                "unresolved_count": len(result.missing),
                "missing_references": [m.to_dict() for m in result.missing],
            }
            Path(args.missing_log).write_text(json.dumps(log_data, indent=2), encoding="utf-8")
    except (ScanError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
