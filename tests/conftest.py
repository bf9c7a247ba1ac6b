import typing

import pytest

import chordbook.cache
import chordbook.catalog


SAMPLE_CATALOG = """Name,Notes,Type,Extension
C,"C,E,G",Major,Triad
Cm,"C,D#,G",Minor,Triad
Cmaj7,"C,E,G,B",Major,7th
Fm6,"F,G#,C,D",Minor,6th
Fdim7,"F,G#,B,D",Diminished,7th
F,"F,A,C",Major,Triad
Csus4,"C,F,G",Suspended,Sus4
C9,"C,E,G,A#,D",Dominant,9th
"""


@pytest.fixture
def sample_text () -> str:

	"""Small catalog covering triads, sevenths and a five-note chord."""

	return SAMPLE_CATALOG


@pytest.fixture
def sample_entries () -> typing.List[chordbook.catalog.ChordEntry]:

	"""Entries parsed from the sample catalog."""

	return chordbook.catalog.parse_catalog(SAMPLE_CATALOG)


@pytest.fixture(scope="session")
def bundled_entries () -> typing.List[chordbook.catalog.ChordEntry]:

	"""Entries parsed from the catalog shipped with the package."""

	return chordbook.catalog.parse_catalog(chordbook.cache.read_source(None))



def entry_by_name (entries: typing.Iterable[chordbook.catalog.ChordEntry], name: str) -> chordbook.catalog.ChordEntry:

	"""Return the first entry with the given name."""

	return next(entry for entry in entries if entry.name == name)
