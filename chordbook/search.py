"""Name search for autocomplete.

Matches are chords whose name contains the query, ignoring case. They are
ranked so that the chord a player most likely means comes first:

1. the exact name,
2. names starting with the query,
3. plain major triads,
4. shorter names,
5. alphabetical order.
"""

import typing

import chordbook.catalog
import chordbook.constants


def is_simple (entry: chordbook.catalog.ChordEntry) -> bool:

	"""Return True for a plain major triad."""

	return (
		entry.category == chordbook.constants.SIMPLE_CATEGORY
		and entry.subcategory == chordbook.constants.SIMPLE_SUBCATEGORY
	)


def _rank_key (entry: chordbook.catalog.ChordEntry, query: str) -> typing.Tuple[bool, bool, bool, int, str]:

	name = entry.name.lower()

	# False sorts before True, so each flag is "does not qualify".
	return (
		name != query,
		not name.startswith(query),
		not is_simple(entry),
		len(name),
		name,
	)


def rank_matches (
	query: str,
	entries: typing.Iterable[chordbook.catalog.ChordEntry],
	limit: int = chordbook.constants.MAX_SEARCH_RESULTS
) -> typing.List[chordbook.catalog.ChordEntry]:

	"""Return the best catalog matches for a query.

	An empty or whitespace-only query returns an empty list without looking
	at ``entries``. Otherwise the query is lower-cased (but not trimmed) and
	compared against lower-cased names.

	Parameters:
		query: Text typed by the user
		entries: Catalog entries to search
		limit: Maximum number of results

	Returns:
		Up to ``limit`` entries, best match first. Entries that tie on every
		rule keep their catalog order.

	Example:
		```python
		rank_matches("c", catalog.entries)[0].name  # "C"
		rank_matches("   ", catalog.entries)        # []
		```
	"""

	if not query.strip():
		return []

	needle = query.lower()
	matches = [entry for entry in entries if needle in entry.name.lower()]

	matches.sort(key=lambda entry: _rank_key(entry, needle))

	return matches[:limit]
