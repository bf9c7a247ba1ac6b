"""Write chord voicings to a standard MIDI file.

Each voicing is played as a block chord, one after another, so a chord's
root position and inversions can be auditioned in any DAW or MIDI player.

Example:
	```python
	import chordbook.midi_export
	import chordbook.voicings

	voicings = chordbook.voicings.compute_voicings(entry)
	chordbook.midi_export.save_voicings(voicings, "cmaj7.mid", bpm=90)
	```
"""

import logging
import typing

import mido

import chordbook.voicings


logger = logging.getLogger(__name__)

TICKS_PER_BEAT = 480


def voicings_to_midi (
	voicings: typing.Sequence[chordbook.voicings.Voicing],
	beats_per_voicing: float = 2,
	velocity: int = 90,
	bpm: float = 120,
	channel: int = 0
) -> mido.MidiFile:

	"""Build a MIDI file playing each voicing as a block chord.

	Parameters:
		voicings: Voicings in playing order
		beats_per_voicing: Length of each chord in beats
		velocity: Note-on velocity (1-127)
		bpm: Tempo written to the file
		channel: MIDI channel (0-15)

	Returns:
		A type 1 ``mido.MidiFile`` with a single track at 480 ticks per beat
	"""

	if beats_per_voicing <= 0:
		raise ValueError("beats_per_voicing must be positive")

	mid = mido.MidiFile(type=1, ticks_per_beat=TICKS_PER_BEAT)
	track = mido.MidiTrack()
	mid.tracks.append(track)

	track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(bpm), time=0))

	length = int(beats_per_voicing * TICKS_PER_BEAT)

	for voicing in voicings:

		for pitch in voicing.pitches:
			track.append(mido.Message("note_on", note=pitch, velocity=velocity, channel=channel, time=0))

		# The first note_off carries the whole chord length; the rest are simultaneous.
		for i, pitch in enumerate(voicing.pitches):
			track.append(mido.Message("note_off", note=pitch, velocity=0, channel=channel, time=length if i == 0 else 0))

	track.append(mido.MetaMessage("end_of_track", time=0))

	return mid


def save_voicings (
	voicings: typing.Sequence[chordbook.voicings.Voicing],
	filename: str,
	**options: typing.Any
) -> None:

	"""Write voicings to ``filename``; options are passed to `voicings_to_midi`.

	Raises:
		OSError: If the file cannot be written.
	"""

	mid = voicings_to_midi(voicings, **options)

	logger.info(f"Saving {len(voicings)} voicings to {filename}...")

	try:
		mid.save(filename)
	except OSError as e:
		logger.error(f"Failed to save MIDI file: {e}")
		raise

	logger.info(f"Saved {filename}")
