"""Recoverable error types.

None of these reach callers of the public loading and search operations:
each is raised at the point the problem is found and caught one level up,
where it is logged and replaced by a safe fallback (a skipped line, the
reference pitch, an empty catalog).
"""


class ChordbookError (Exception):

	"""Base class for all chordbook errors."""


class RecordFormatError (ChordbookError, ValueError):

	"""A catalog line does not match ``Name,"Notes",Category,Subcategory``."""


class UnknownPitchLabel (ChordbookError, ValueError):

	"""A note-name label is not a letter A–G with an optional sharp or flat."""


class SourceUnavailable (ChordbookError, OSError):

	"""The raw catalog text could not be read or fetched."""
