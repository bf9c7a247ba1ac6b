"""Chord inversions for keyboard display.

Each chord is shown in root position plus up to three inversions. An
inversion moves the bottom note(s) up an octave, rotates them to the top and
re-stacks the result so it still ascends. Voicings that climb past the
two-octave display window (Middle C to B5) are dropped by one octave.

Example:
	```python
	import chordbook.catalog
	import chordbook.voicings

	entry = chordbook.catalog.parse_record('C,"C,E,G",Major,Triad')

	for voicing in chordbook.voicings.compute_voicings(entry):
		print(voicing.label, voicing.pitches)

	# Root (60, 64, 67)
	# 1st Inv (64, 67, 72)
	# 2nd Inv (67, 72, 76)
	```
"""

import dataclasses
import typing

import chordbook.catalog
import chordbook.constants
import chordbook.pitch


@dataclasses.dataclass(frozen=True)
class Voicing:

	"""
	One labelled arrangement of a chord's pitches, lowest first.
	"""

	label: str
	pitches: typing.Tuple[int, ...]


def invert_pitches (pitches: typing.Sequence[int], inversion: int) -> typing.List[int]:

	"""Rotate ascending pitches into an inversion.

	The lowest ``inversion`` notes are raised by an octave and moved to the
	top, then every note after the new bass is raised by whole octaves until
	the voicing ascends again. Inversion 0 returns a copy.

	Parameters:
		pitches: Pitch numbers in ascending order
		inversion: How many bottom notes to move up (0 <= inversion < len(pitches))

	Returns:
		New ascending list of pitch numbers

	Example:
		```python
		invert_pitches([60, 64, 67], 1)      # [64, 67, 72]  - first inversion
		invert_pitches([60, 64, 67], 2)      # [67, 72, 76]  - second inversion
		invert_pitches([65, 68, 72, 74], 3)  # [74, 77, 80, 84]
		```
	"""

	n = len(pitches)

	if not 0 <= inversion < max(n, 1):
		raise ValueError(f"Inversion {inversion} is out of range for a {n}-note chord")

	raised = [
		pitch + chordbook.constants.OCTAVE if i < inversion else pitch
		for i, pitch in enumerate(pitches)
	]

	rotated = raised[inversion:] + raised[:inversion]

	return chordbook.pitch.ascending(rotated)


def fit_display_window (pitches: typing.Sequence[int]) -> typing.List[int]:

	"""Drop a voicing by one octave if its top note is above the display window.

	Only a single shift is applied. A voicing that is still out of the window
	afterwards is returned as it is.

	Example:
		```python
		fit_display_window([74, 77, 80, 84])  # [62, 65, 68, 72]
		fit_display_window([64, 67, 72])      # [64, 67, 72]
		```
	"""

	if pitches and max(pitches) > chordbook.constants.DISPLAY_HIGH:
		return [pitch - chordbook.constants.OCTAVE for pitch in pitches]

	return list(pitches)


def compute_voicings (entry: chordbook.catalog.ChordEntry) -> typing.List[Voicing]:

	"""Return root position and inversions for a catalog entry.

	The result holds ``min(len(entry.pitches), 4)`` voicings labelled
	``"Root"``, ``"1st Inv"``, ``"2nd Inv"`` and ``"3rd Inv"``. Root position
	is the entry's own pitches. Notes past the fourth never get an inversion
	of their own.

	Parameters:
		entry: A parsed chord

	Returns:
		Voicings in inversion order, each strictly ascending and containing
		the same pitch classes as the entry
	"""

	count = min(len(entry.pitches), chordbook.constants.MAX_VOICINGS)

	voicings = [Voicing(label=chordbook.constants.VOICING_LABELS[0], pitches=tuple(entry.pitches))]

	for inversion in range(1, count):

		pitches = fit_display_window(invert_pitches(entry.pitches, inversion))

		voicings.append(Voicing(
			label = chordbook.constants.VOICING_LABELS[inversion],
			pitches = tuple(pitches)
		))

	return voicings
