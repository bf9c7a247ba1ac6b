"""Chord catalog records and parsing.

The catalog is plain text with one header line followed by one chord per
line::

	Name,Notes,Type,Extension
	C,"C,E,G",Major,Triad
	Fm6,"F,G#,C,D",Minor,6th

The second field is a double-quoted, comma-separated list of note names in
the order the chord is voiced. Each line becomes a `ChordEntry` whose pitch
numbers keep that authored order: the first note sits in the octave above
Middle C and every following note is raised by whole octaves until it is
above the previous one.

Bad lines are logged and skipped; a single malformed record never stops the
rest of the catalog from loading.
"""

import dataclasses
import logging
import typing

import chordbook.constants
import chordbook.errors
import chordbook.pitch


logger = logging.getLogger(__name__)

FIELD_COUNT = 4
QUOTE = '"'
SEPARATOR = ","


@dataclasses.dataclass(frozen=True)
class ChordEntry:

	"""
	A named chord with its note names and ascending pitch numbers.
	"""

	name: str
	note_names: typing.Tuple[str, ...]
	pitches: typing.Tuple[int, ...]
	category: str
	subcategory: str

	def __post_init__ (self) -> None:

		if not self.pitches:
			raise ValueError(f"{self.name!r}: a chord needs at least one note")

		if len(self.pitches) != len(self.note_names):
			raise ValueError(
				f"{self.name!r}: {len(self.note_names)} note names but {len(self.pitches)} pitches"
			)

		for previous, current in zip(self.pitches, self.pitches[1:]):
			if current <= previous:
				raise ValueError(f"{self.name!r}: pitches must be strictly ascending, got {list(self.pitches)}")

		for pitch in self.pitches:
			if not chordbook.constants.MIN_PITCH <= pitch <= chordbook.constants.MAX_PITCH:
				raise ValueError(f"{self.name!r}: pitch {pitch} is outside the MIDI range 0-127")


	def pitch_classes (self) -> typing.List[int]:

		"""
		Return the pitch class (0-11) of each note, in voiced order.
		"""

		return [pitch % chordbook.constants.OCTAVE for pitch in self.pitches]


def split_record (line: str) -> typing.Tuple[str, str, str, str]:

	"""Split one catalog line into its four trimmed fields.

	Commas separate fields except inside the double-quoted note list. The
	note list must be the second field and is the only field that may be
	quoted. Quotes are not escaped, so a note list ends at the next quote.

	Parameters:
		line: A single record, without its line terminator.

	Returns:
		``(name, notes, category, subcategory)`` with surrounding whitespace
		removed and the quotes around ``notes`` dropped.

	Raises:
		RecordFormatError: If the line does not have exactly that shape.

	Example:
		```python
		split_record('Cmaj7,"C,E,G,B",Major,7th')
		# ('Cmaj7', 'C,E,G,B', 'Major', '7th')
		```
	"""

	fields: typing.List[typing.Tuple[str, bool]] = []
	current: typing.List[str] = []
	in_quotes = False
	was_quoted = False

	for char in line:

		if in_quotes:
			if char == QUOTE:
				in_quotes = False
			else:
				current.append(char)
			continue

		if char == SEPARATOR:
			fields.append(("".join(current).strip(), was_quoted))
			current = []
			was_quoted = False
			continue

		if char == QUOTE:
			if was_quoted or "".join(current).strip():
				raise chordbook.errors.RecordFormatError(f"Unexpected quote in field {len(fields) + 1}")
			current = []
			in_quotes = True
			was_quoted = True
			continue

		if was_quoted and not char.isspace():
			raise chordbook.errors.RecordFormatError(f"Text after closing quote in field {len(fields) + 1}")

		current.append(char)

	if in_quotes:
		raise chordbook.errors.RecordFormatError("Unterminated quote")

	fields.append(("".join(current).strip(), was_quoted))

	if len(fields) != FIELD_COUNT:
		raise chordbook.errors.RecordFormatError(f"Expected {FIELD_COUNT} fields, found {len(fields)}")

	for index, (text, quoted) in enumerate(fields):

		if quoted != (index == 1):
			expected = "quoted" if index == 1 else "unquoted"
			raise chordbook.errors.RecordFormatError(f"Field {index + 1} must be {expected}")

		if not text:
			raise chordbook.errors.RecordFormatError(f"Field {index + 1} is empty")

	name, notes, category, subcategory = (text for text, _ in fields)

	return name, notes, category, subcategory


def parse_record (line: str) -> ChordEntry:

	"""Parse one catalog line into a `ChordEntry`.

	Note names are mapped with `chordbook.pitch.note_to_pitch` (unknown names
	become Middle C with a warning) and then stacked with
	`chordbook.pitch.ascending`.

	Raises:
		RecordFormatError: If the line is malformed or yields an invalid entry.
	"""

	name, notes, category, subcategory = split_record(line)

	note_names = tuple(label.strip() for label in notes.split(SEPARATOR))
	pitches = chordbook.pitch.ascending([chordbook.pitch.note_to_pitch(label) for label in note_names])

	try:
		return ChordEntry(
			name = name,
			note_names = note_names,
			pitches = tuple(pitches),
			category = category,
			subcategory = subcategory
		)

	except ValueError as exc:
		raise chordbook.errors.RecordFormatError(str(exc)) from exc


def parse_catalog (text: str) -> typing.List[ChordEntry]:

	"""Parse a whole catalog, skipping the header and any malformed lines.

	Blank lines are ignored silently. Every other line that cannot be parsed
	is logged as a warning with its line number.

	Parameters:
		text: Raw catalog text including the header line.

	Returns:
		Entries in file order.
	"""

	lines = text.strip().splitlines()
	entries: typing.List[ChordEntry] = []

	# Line 1 is the header.
	for number, raw in enumerate(lines[1:], start=2):

		line = raw.strip()

		if not line:
			continue

		try:
			entries.append(parse_record(line))

		except chordbook.errors.RecordFormatError as exc:
			logger.warning(f"Skipping catalog line {number} ({exc}): {line!r}")

	logger.debug(f"Parsed {len(entries)} chords from {len(lines)} lines")

	return entries
