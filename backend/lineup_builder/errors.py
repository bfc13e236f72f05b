"""Error taxonomy for lineup actions.

Services raise these; the session records them as status messages and the
routers translate them into ``HTTPException`` using ``status_code``.
"""

from __future__ import annotations


class LineupError(Exception):
    status_code: int = 400


class ValidationError(LineupError):
    """A saved lineup name was empty after trimming."""


class ParseError(LineupError):
    """Imported text was not well-formed JSON."""


class FormatError(LineupError):
    """Imported JSON did not have the lineup payload shape."""


class PersistenceError(LineupError):
    status_code = 500


class ClipboardError(LineupError):
    status_code = 500


class ChemistryDataError(LineupError):
    """Chemistry data could not be read, or none is loaded yet."""
