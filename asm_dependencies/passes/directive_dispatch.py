"""
DirectiveDispatcher
===================

Maps a directive keyword to the action the scanner takes for it.

+----------------------+-------------------------------------------+
| Keyword              | Action                                    |
+======================+===========================================+
| ``incdir``           | register a search directory               |
+----------------------+-------------------------------------------+
| ``include``          | resolve and scan the file recursively     |
+----------------------+-------------------------------------------+
| ``incbin``           | resolve and record as a leaf dependency   |
| ``binclude``         |                                           |
+----------------------+-------------------------------------------+
| anything else        | ignore the line                           |
+----------------------+-------------------------------------------+

Keywords are compared case-insensitively.
"""
from __future__ import annotations

from typing import Dict, Optional

from ..models import BINCLUDE, INCBIN, INCDIR, INCLUDE, Directive, DirectiveAction

DEFAULT_ACTIONS: Dict[str, DirectiveAction] = {
    INCDIR: DirectiveAction.ADD_SEARCH_PATH,
    INCLUDE: DirectiveAction.INCLUDE,
    INCBIN: DirectiveAction.BINARY,
    BINCLUDE: DirectiveAction.BINARY,
}


class DirectiveDispatcher:
    """
    Classifies directives.

    Parameters
    ----------
    actions:
        Keyword to action table.  Defaults to :data:`DEFAULT_ACTIONS`.
    """

    def __init__(self, actions: Optional[Dict[str, DirectiveAction]] = None) -> None:
        table = actions if actions is not None else DEFAULT_ACTIONS
        self._actions = {keyword.lower(): action for keyword, action in table.items()}

    def action_for(self, keyword: str) -> DirectiveAction:
        return self._actions.get(keyword.lower(), DirectiveAction.IGNORE)

    def run(self, directive: Optional[Directive]) -> DirectiveAction:
        """Return the action for *directive*; lines without one are ignored."""
        if directive is None:
            return DirectiveAction.IGNORE
        return self.action_for(directive.keyword)
