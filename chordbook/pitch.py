"""Note names and pitch numbers.

Every note-name label maps to a pitch number in the octave starting at
Middle C, so ``"C"`` is 60 and ``"B"`` is 71. Enharmonic spellings share a
pitch number (``"C#"`` and ``"Db"`` are both 61). Sharps may be written as
``#`` or ``♯`` and flats as ``b`` or ``♭``.

Module-level constants:
- `PitchClass`: The twelve pitch classes (``PitchClass.C`` = 0 … ``PitchClass.B`` = 11)
- `PITCH_CLASS_ALIASES`: The accepted spellings of each pitch class
- `LABEL_TO_PITCH_CLASS`: Flat lookup table built from the aliases
- `PC_TO_NOTE_NAME`: Sharp spelling of each pitch class, used for display

Example:
	```python
	import chordbook.pitch

	chordbook.pitch.note_to_pitch("C")    # 60
	chordbook.pitch.note_to_pitch("Bb")   # 70
	chordbook.pitch.note_to_pitch("H")    # 60, with a logged warning
	chordbook.pitch.pitch_name(61)        # "C#4"
	```
"""

import enum
import logging
import typing

import chordbook.constants
import chordbook.errors


logger = logging.getLogger(__name__)


class PitchClass (enum.IntEnum):

	"""Pitch number modulo 12, named by the sharp spelling."""

	C = 0
	CS = 1
	D = 2
	DS = 3
	E = 4
	F = 5
	FS = 6
	G = 7
	GS = 8
	A = 9
	AS = 10
	B = 11


PITCH_CLASS_ALIASES: typing.Dict[PitchClass, typing.Tuple[str, ...]] = {
	PitchClass.C: ("C", "B#"),
	PitchClass.CS: ("C#", "Db"),
	PitchClass.D: ("D",),
	PitchClass.DS: ("D#", "Eb"),
	PitchClass.E: ("E", "Fb"),
	PitchClass.F: ("F", "E#"),
	PitchClass.FS: ("F#", "Gb"),
	PitchClass.G: ("G",),
	PitchClass.GS: ("G#", "Ab"),
	PitchClass.A: ("A",),
	PitchClass.AS: ("A#", "Bb"),
	PitchClass.B: ("B", "Cb"),
}

_missing = set(PitchClass) - set(PITCH_CLASS_ALIASES)

if _missing:
	raise RuntimeError(f"Pitch classes without aliases: {sorted(_missing)}")

LABEL_TO_PITCH_CLASS: typing.Dict[str, PitchClass] = {
	alias: pitch_class
	for pitch_class, aliases in PITCH_CLASS_ALIASES.items()
	for alias in aliases
}

PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]

_MARKERS = str.maketrans({"♯": "#", "♭": "b"})


def normalize_label (label: str) -> str:

	"""Strip whitespace and rewrite ``♯``/``♭`` markers as ``#``/``b``."""

	return label.strip().translate(_MARKERS)


def pitch_class (label: str) -> PitchClass:

	"""Return the pitch class of a note-name label.

	Parameters:
		label: A letter A–G, optionally followed by one sharp or flat marker.

	Returns:
		The matching ``PitchClass``.

	Raises:
		UnknownPitchLabel: If the label is not recognised.

	Example:
		```python
		pitch_class("F#")  # PitchClass.FS
		pitch_class("Gb")  # PitchClass.FS
		```
	"""

	key = normalize_label(label)

	if key not in LABEL_TO_PITCH_CLASS:
		raise chordbook.errors.UnknownPitchLabel(
			f"Unknown note name: {label!r}. Expected e.g. 'C', 'F#', 'Bb'."
		)

	return LABEL_TO_PITCH_CLASS[key]


def note_to_pitch (label: str) -> int:

	"""Return the pitch number of a note-name label, anchored at C = 60.

	Unrecognised labels do not raise: a warning is logged and the reference
	pitch (60) is returned so that the rest of a chord can still be used.
	"""

	try:
		return chordbook.constants.REFERENCE_PITCH + int(pitch_class(label))

	except chordbook.errors.UnknownPitchLabel as exc:
		logger.warning(f"{exc} Using {chordbook.constants.REFERENCE_PITCH} instead.")
		return chordbook.constants.REFERENCE_PITCH


def pitch_name (pitch: int) -> str:

	"""Return a display name with octave number, e.g. ``60`` → ``"C4"``."""

	octave = (pitch // chordbook.constants.OCTAVE) - 1

	return f"{PC_TO_NOTE_NAME[pitch % chordbook.constants.OCTAVE]}{octave}"


def ascending (pitches: typing.Sequence[int]) -> typing.List[int]:

	"""Raise each pitch by whole octaves until it sits above its predecessor.

	The first pitch is kept as-is. Authored note order is preserved, so a
	chord written F, Ab, C, D stacks as 65, 68, 72, 74 rather than being
	sorted by pitch class.

	Example:
		```python
		ascending([65, 68, 60, 62])  # [65, 68, 72, 74]
		ascending([67, 60, 64])      # [67, 72, 76]
		```
	"""

	result: typing.List[int] = []

	for pitch in pitches:

		if result:
			while pitch <= result[-1]:
				pitch += chordbook.constants.OCTAVE

		result.append(pitch)

	return result
