"""Diatonic triads for the twelve major and twelve minor keys.

Each row of `KEY_CHART` lists the seven triads built on the degrees of a key,
written as chord symbols: a root name, then ``m`` for minor or ``°`` for
diminished. Spellings follow the usual chart conventions (``G♭`` major
contains ``B`` rather than ``C♭``).

`diatonic_entries` turns a row into `ChordEntry` values so the chart can be
voiced with the same `chordbook.voicings.compute_voicings` used for the
catalog. That includes the display-window shift: an inversion whose top
note rises above B5 is dropped an octave, so the second inversion of ``B``
comes out as (66, 71, 75).

Example:
	```python
	import chordbook.key_chart
	import chordbook.voicings

	for entry in chordbook.key_chart.diatonic_entries("Am Minor"):
		print(entry.name, entry.pitches)
	# Am (69, 72, 76)
	# B° (71, 74, 77)
	# C (60, 64, 67)
	# ...
	```
"""

import dataclasses
import typing

import chordbook.catalog
import chordbook.constants
import chordbook.pitch


@dataclasses.dataclass(frozen=True)
class KeyChartRow:

	"""
	One key and its seven diatonic triads, tonic first.
	"""

	name: str
	mode: str
	chords: typing.Tuple[str, ...]

	@property
	def label (self) -> str:

		"""
		Display label such as ``"E♭ Major"``.
		"""

		return f"{self.name} {self.mode}"


MAJOR = "Major"
MINOR = "Minor"

DIMINISHED_MARK = "°"
MINOR_MARK = "m"

TRIAD = "Triad"

TRIAD_INTERVALS: typing.Dict[str, typing.List[int]] = {
	"Major": [0, 4, 7],
	"Minor": [0, 3, 7],
	"Diminished": [0, 3, 6],
}


KEY_CHART: typing.Tuple[KeyChartRow, ...] = (

	# -- Major keys: I ii iii IV V vi vii° --

	KeyChartRow("C", MAJOR, ("C", "Dm", "Em", "F", "G", "Am", "B°")),
	KeyChartRow("D♭", MAJOR, ("D♭", "E♭m", "Fm", "G♭", "A♭", "B♭m", "C°")),
	KeyChartRow("D", MAJOR, ("D", "Em", "F♯m", "G", "A", "Bm", "C♯°")),
	KeyChartRow("E♭", MAJOR, ("E♭", "Fm", "Gm", "A♭", "B♭", "Cm", "D°")),
	KeyChartRow("E", MAJOR, ("E", "F♯m", "G♯m", "A", "B", "C♯m", "D♯°")),
	KeyChartRow("F", MAJOR, ("F", "Gm", "Am", "B♭", "C", "Dm", "E°")),
	KeyChartRow("G♭", MAJOR, ("G♭", "A♭m", "B♭m", "B", "D♭", "E♭m", "F°")),
	KeyChartRow("G", MAJOR, ("G", "Am", "Bm", "C", "D", "Em", "F♯°")),
	KeyChartRow("A♭", MAJOR, ("A♭", "B♭m", "Cm", "D♭", "E♭", "Fm", "G°")),
	KeyChartRow("A", MAJOR, ("A", "Bm", "C♯m", "D", "E", "F♯m", "G♯°")),
	KeyChartRow("B♭", MAJOR, ("B♭", "Cm", "Dm", "E♭", "F", "Gm", "A°")),
	KeyChartRow("B", MAJOR, ("B", "C♯m", "D♯m", "E", "F♯", "G♯m", "A♯°")),

	# -- Natural minor keys: i ii° III iv v VI VII --

	KeyChartRow("Am", MINOR, ("Am", "B°", "C", "Dm", "Em", "F", "G")),
	KeyChartRow("B♭m", MINOR, ("B♭m", "C°", "D♭", "E♭m", "Fm", "G♭", "A♭")),
	KeyChartRow("Bm", MINOR, ("Bm", "C♯°", "D", "Em", "F♯m", "G", "A")),
	KeyChartRow("Cm", MINOR, ("Cm", "D°", "E♭", "Fm", "Gm", "A♭", "B♭")),
	KeyChartRow("C♯m", MINOR, ("C♯m", "D♯°", "E", "F♯m", "G♯m", "A", "B")),
	KeyChartRow("Dm", MINOR, ("Dm", "E°", "F", "Gm", "Am", "B♭", "C")),
	KeyChartRow("D♯m", MINOR, ("D♯m", "E♯°", "F♯", "G♯m", "A♯m", "B", "C♯")),
	KeyChartRow("Em", MINOR, ("Em", "F♯°", "G", "Am", "Bm", "C", "D")),
	KeyChartRow("Fm", MINOR, ("Fm", "G°", "A♭", "B♭m", "Cm", "D♭", "E♭")),
	KeyChartRow("F♯m", MINOR, ("F♯m", "G♯°", "A", "Bm", "C♯m", "D", "E")),
	KeyChartRow("Gm", MINOR, ("Gm", "A°", "B♭", "Cm", "Dm", "E♭", "F")),
	KeyChartRow("G♯m", MINOR, ("G♯m", "A♯°", "B", "C♯m", "D♯m", "E", "F♯")),
)


def key_names (mode: typing.Optional[str] = None) -> typing.List[str]:

	"""Return chart labels (``"C Major"``, ``"Am Minor"``, …), optionally for one mode."""

	return [row.label for row in KEY_CHART if mode is None or row.mode == mode]


def find_key (label: str) -> KeyChartRow:

	"""Return the chart row for a label such as ``"E♭ Major"``.

	ASCII ``#`` and ``b`` are accepted in place of ``♯`` and ``♭``.

	Raises:
		KeyError: If no row matches.
	"""

	wanted = chordbook.pitch.normalize_label(label)

	for row in KEY_CHART:
		if chordbook.pitch.normalize_label(row.label) == wanted:
			return row

	raise KeyError(f"Unknown key: {label!r}. Available: {', '.join(key_names())}")


def symbol_quality (symbol: str) -> str:

	"""Return ``"Diminished"``, ``"Minor"`` or ``"Major"`` for a chart symbol."""

	if DIMINISHED_MARK in symbol:
		return "Diminished"

	if MINOR_MARK in symbol:
		return "Minor"

	return "Major"


def symbol_to_entry (symbol: str) -> chordbook.catalog.ChordEntry:

	"""Build a root-position triad entry from a chart symbol.

	The root is placed in the octave above Middle C and the triad is stacked
	on it, so ``"B°"`` gives ``(71, 74, 77)``. Note names use sharp spellings.

	Raises:
		UnknownPitchLabel: If the root is not a recognised note name.
	"""

	quality = symbol_quality(symbol)
	root = symbol.replace(DIMINISHED_MARK, "").replace(MINOR_MARK, "")

	root_pitch = chordbook.constants.REFERENCE_PITCH + int(chordbook.pitch.pitch_class(root))
	pitches = tuple(root_pitch + interval for interval in TRIAD_INTERVALS[quality])

	return chordbook.catalog.ChordEntry(
		name = symbol,
		note_names = tuple(chordbook.pitch.PC_TO_NOTE_NAME[pitch % chordbook.constants.OCTAVE] for pitch in pitches),
		pitches = pitches,
		category = quality,
		subcategory = TRIAD
	)


def diatonic_entries (label: str) -> typing.List[chordbook.catalog.ChordEntry]:

	"""Return the seven diatonic triads of a key as catalog-style entries."""

	return [symbol_to_entry(symbol) for symbol in find_key(label).chords]
