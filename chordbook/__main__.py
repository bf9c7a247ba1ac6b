import argparse
import asyncio
import logging
import os
import sys
import typing

import yaml

import chordbook.cache
import chordbook.catalog
import chordbook.key_chart
import chordbook.midi_export
import chordbook.pitch
import chordbook.voicings


logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "chordbook.yaml"


def load_config (config_path: str = DEFAULT_CONFIG) -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def build_parser () -> argparse.ArgumentParser:

	"""
	Return the command-line parser.
	"""

	parser = argparse.ArgumentParser(prog="chordbook", description="Look up chords, their inversions and diatonic key charts.")
	parser.add_argument("--config", default=DEFAULT_CONFIG, help=f"YAML config file (default: {DEFAULT_CONFIG})")

	commands = parser.add_subparsers(dest="command", required=True)

	search = commands.add_parser("search", help="Rank chord names matching a query")
	search.add_argument("query")

	show = commands.add_parser("show", help="Print a chord's voicings")
	show.add_argument("name")
	show.add_argument("--midi", metavar="FILE", help="Also write the voicings to a MIDI file")

	key = commands.add_parser("key", help="Print the diatonic triads of a key")
	key.add_argument("label", nargs="?", help='Key label, e.g. "E♭ Major" or "Am Minor"')
	key.add_argument("--list", action="store_true", help="List the available keys")

	return parser


def format_voicing (voicing: chordbook.voicings.Voicing) -> str:

	"""
	One display line: label, note names with octaves, pitch numbers.
	"""

	names = " ".join(chordbook.pitch.pitch_name(pitch) for pitch in voicing.pitches)

	return f"  {voicing.label:<8} {names:<20} {list(voicing.pitches)}"


def print_chord (entry: chordbook.catalog.ChordEntry) -> typing.List[chordbook.voicings.Voicing]:

	"""
	Print an entry's heading and voicings, and return the voicings.
	"""

	voicings = chordbook.voicings.compute_voicings(entry)

	print(f"{entry.name} ({entry.category} {entry.subcategory}): {', '.join(entry.note_names)}")

	for voicing in voicings:
		print(format_voicing(voicing))

	return voicings


async def run (args: argparse.Namespace, config: dict) -> int:

	"""
	Execute one command and return the process exit status.
	"""

	catalog_config = config.get('catalog') or {}
	midi_config = config.get('midi') or {}

	catalog = chordbook.cache.ChordCatalog(
		source = catalog_config.get('source'),
		timeout = catalog_config.get('timeout', chordbook.cache.DEFAULT_TIMEOUT)
	)

	if args.command == "search":

		for entry in await catalog.search(args.query):
			print(f"{entry.name:<12} {entry.category} {entry.subcategory}")

		return 0

	if args.command == "show":

		await catalog.load()
		entry = catalog.get(args.name)

		if entry is None:
			print(f"No chord named {args.name!r}", file=sys.stderr)
			return 1

		voicings = print_chord(entry)

		if args.midi:
			chordbook.midi_export.save_voicings(
				voicings,
				args.midi,
				bpm = midi_config.get('bpm', 120),
				velocity = midi_config.get('velocity', 90),
				beats_per_voicing = midi_config.get('beats_per_voicing', 2)
			)

		return 0

	# key
	if args.list or not args.label:

		for label in chordbook.key_chart.key_names():
			print(label)

		return 0

	try:
		entries = chordbook.key_chart.diatonic_entries(args.label)
	except KeyError as exc:
		print(exc.args[0], file=sys.stderr)
		return 1

	for entry in entries:
		print_chord(entry)

	return 0


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the chordbook command line.
	"""

	args = build_parser().parse_args(argv)
	config = load_config(args.config)

	level = (config.get('logging') or {}).get('level', 'INFO')
	logging.basicConfig(level=level)

	return asyncio.run(run(args, config))


if __name__ == "__main__":
	sys.exit(main())
