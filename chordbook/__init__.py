"""
chordbook - chord lookup, inversions and name search for keyboard charts.

chordbook reads a small catalog of chord definitions (name, note names,
quality, structure) and gives a display layer everything it needs to draw
chords on a keyboard:

- **Typed entries.** Each catalog line becomes a ``ChordEntry`` whose pitch
  numbers keep the authored voicing and always ascend.
- **Voicings.** ``compute_voicings()`` returns root position plus up to three
  inversions, kept inside a two-octave window starting at Middle C.
- **Search.** ``ChordCatalog.search()`` ranks chord names for autocomplete:
  exact match, then prefix, then plain major triads, then shorter names.
- **Key chart.** ``chordbook.key_chart`` lists the diatonic triads of all 24
  major and minor keys as entries that voice the same way.
- **MIDI export.** ``chordbook.midi_export`` writes voicings to a MIDI file.

Minimal example:

    ```python
    import asyncio
    import chordbook

    async def main () -> None:
        catalog = chordbook.ChordCatalog()
        for entry in await catalog.search("m7"):
            print(entry.name, [v.pitches for v in chordbook.compute_voicings(entry)])

    asyncio.run(main())
    ```

Package-level exports: ``ChordCatalog``, ``ChordEntry``, ``Voicing``,
``compute_voicings``, ``rank_matches``, ``note_to_pitch``.
"""

import chordbook.cache
import chordbook.catalog
import chordbook.pitch
import chordbook.search
import chordbook.voicings


ChordCatalog = chordbook.cache.ChordCatalog
ChordEntry = chordbook.catalog.ChordEntry
Voicing = chordbook.voicings.Voicing
compute_voicings = chordbook.voicings.compute_voicings
rank_matches = chordbook.search.rank_matches
note_to_pitch = chordbook.pitch.note_to_pitch
