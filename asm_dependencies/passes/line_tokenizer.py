"""
LineTokenizer
=============

Splits one line of free-form assembly source into a label, a directive
keyword and its operand.

Steps, applied in order:

1. Tabs become single spaces.
2. Blank lines, and lines with ``*`` in the first column, yield nothing.
3. Everything from the first ``;`` that is not inside a quoted string is
   discarded.
4. The rest is split on runs of spaces.
5. When the line is not indented the first token is a label: trailing
   colons are stripped and, if something is left, the token is removed.
   An unindented directive keyword without a colon is kept as the keyword,
   and a glued ``label:directive`` token keeps its directive part.
6. The first remaining token is the keyword, the second the operand.
7. An operand of three or more characters wrapped in matching ``'`` or
   ``"`` quotes loses the quotes.

Indented first tokens are never labels.
"""
from __future__ import annotations

import re
from typing import List, Optional

from ..models import DIRECTIVE_KEYWORDS, TokenizedLine

_QUOTES = ("'", '"')
_GLUED_LABEL_RE = re.compile(r"^([^:]+):+([^:].*)$")


class LineTokenizer:
    """Turns raw source lines into :class:`~asm_dependencies.models.TokenizedLine`."""

    COMMENT_CHAR: str = ";"
    LINE_COMMENT_CHAR: str = "*"

    def run(self, line: str) -> TokenizedLine:
        """
        Tokenize a single source line.

        Parameters
        ----------
        line:
            One line of source text, with or without its line terminator.

        Returns
        -------
        TokenizedLine
            Directive / operand tokens plus the label, if one was stripped.
        """
        line = line.rstrip("\r\n").replace("\t", " ")
        if not line.strip(" "):
            return TokenizedLine(tokens=[])
        if line.startswith(self.LINE_COMMENT_CHAR):
            return TokenizedLine(tokens=[])

        indented = line.startswith(" ")
        tokens = self.split(self.strip_comment(line))

        label: Optional[str] = None
        if not indented and tokens:
            label, tokens = self._take_label(tokens)

        if len(tokens) >= 2:
            tokens[1] = self.unquote(tokens[1])
        return TokenizedLine(tokens=tokens, label=label)

    # ------------------------------------------------------------------

    @classmethod
    def strip_comment(cls, text: str) -> str:
        """
        Drop everything from the first unquoted comment character.

        A quote left open at the end of the line (``don't.inc``) was not a
        string, so the first comment character wins after all.
        """
        quote: Optional[str] = None
        for index, char in enumerate(text):
            if quote:
                if char == quote:
                    quote = None
            elif char in _QUOTES:
                quote = char
            elif char == cls.COMMENT_CHAR:
                return text[:index]
        if quote:
            return text.split(cls.COMMENT_CHAR, 1)[0]
        return text

    @staticmethod
    def split(text: str) -> List[str]:
        """Split *text* on runs of spaces, keeping the trailing token."""
        return [token for token in text.split(" ") if token]

    @staticmethod
    def unquote(operand: str) -> str:
        """Strip one pair of matching quote characters from *operand*."""
        if len(operand) >= 3 and operand[0] == operand[-1] and operand[0] in _QUOTES:
            return operand[1:-1]
        return operand

    @staticmethod
    def _take_label(tokens: List[str]):
        first = tokens[0]

        glued = _GLUED_LABEL_RE.match(first)
        if glued:
            return glued.group(1), [glued.group(2)] + tokens[1:]

        if not first.endswith(":") and first.lower() in DIRECTIVE_KEYWORDS:
            return None, tokens

        name = first.rstrip(":")
        if not name:
            return None, tokens
        return name, tokens[1:]
