"""Shared pitch, voicing and search constants.

Pitch numbers follow the MIDI convention: **C4 = 60** (Middle C). The keyboard
display window shown next to a chord spans two octaves starting at Middle C,
so voicings are kept between ``DISPLAY_LOW`` and ``DISPLAY_HIGH`` where a
single octave shift allows it.
"""

import typing


REFERENCE_PITCH = 60

MIN_PITCH = 0
MAX_PITCH = 127

OCTAVE = 12

DISPLAY_LOW = REFERENCE_PITCH
DISPLAY_HIGH = DISPLAY_LOW + (2 * OCTAVE) - 1  # 83, B5

# Root position plus at most three inversions.
MAX_VOICINGS = 4

VOICING_LABELS: typing.List[str] = [
	"Root",
	"1st Inv",
	"2nd Inv",
	"3rd Inv",
]

MAX_SEARCH_RESULTS = 20

# Category / subcategory pair that marks a plain major triad in search ranking.
SIMPLE_CATEGORY = "Major"
SIMPLE_SUBCATEGORY = "Triad"
