"""Lazily loaded chord catalog.

A `ChordCatalog` is created once by the application and handed to whatever
needs chord data. The first call to `ChordCatalog.load` reads and parses the
source; every later call returns the same immutable tuple. Concurrent first
callers share one load.

Loading never raises. If the source cannot be read, the error is logged and
the catalog is empty for the rest of the handle's life.

Example:
	```python
	import asyncio
	import chordbook

	async def main () -> None:
		catalog = chordbook.ChordCatalog()           # bundled chords.csv
		entries = await catalog.load()
		matches = await catalog.search("maj7")
		voicings = chordbook.compute_voicings(matches[0])

	asyncio.run(main())
	```
"""

import asyncio
import importlib.resources
import inspect
import logging
import os
import pathlib
import typing
import urllib.request

import chordbook.catalog
import chordbook.constants
import chordbook.errors
import chordbook.search


logger = logging.getLogger(__name__)

BUNDLED_CATALOG = "data/chords.csv"
DEFAULT_TIMEOUT = 10.0

SourceReader = typing.Callable[[], typing.Union[str, bytes, typing.Awaitable[typing.Union[str, bytes]]]]
Source = typing.Union[None, str, os.PathLike, SourceReader]


def _describe (source: Source) -> str:

	if source is None:
		return "bundled catalog"

	if callable(source):
		return getattr(source, "__name__", repr(source))

	return os.fspath(source)


def _as_text (result: object) -> str:

	"""Accept text or UTF-8 bytes from a callable source."""

	if isinstance(result, str):
		return result

	if isinstance(result, (bytes, bytearray)):
		try:
			return bytes(result).decode("utf-8")
		except UnicodeDecodeError as exc:
			raise chordbook.errors.SourceUnavailable(f"Catalog bytes are not UTF-8: {exc}") from exc

	raise chordbook.errors.SourceUnavailable(f"Catalog source returned {type(result).__name__}, expected str or bytes")


def read_source (source: Source, timeout: float = DEFAULT_TIMEOUT) -> str:

	"""Read raw catalog text from the bundled file, a path or a URL.

	This blocks, so `ChordCatalog` runs it in a worker thread.

	Parameters:
		source: ``None`` for the bundled catalog, a filesystem path, or an
			``http://`` / ``https://`` URL
		timeout: Seconds to wait for a URL to respond

	Raises:
		SourceUnavailable: If the text cannot be read or decoded.
	"""

	try:

		if source is None:
			return importlib.resources.files("chordbook").joinpath(BUNDLED_CATALOG).read_text(encoding="utf-8")

		if isinstance(source, str) and source.startswith(("http://", "https://")):
			with urllib.request.urlopen(source, timeout=timeout) as response:
				return response.read().decode("utf-8")

		return pathlib.Path(source).read_text(encoding="utf-8")

	except (OSError, UnicodeDecodeError, ValueError) as exc:
		raise chordbook.errors.SourceUnavailable(f"Cannot read chord catalog from {_describe(source)}: {exc}") from exc


class ChordCatalog:

	"""Owns the parsed chord catalog and loads it at most once.

	Parameters:
		source: Where to read the catalog from. ``None`` (default) uses the
			catalog shipped with the package. A path or URL string is read in a
			worker thread. A zero-argument callable is called and, if it returns
			an awaitable, awaited; it must produce the raw text as str or UTF-8 bytes.
		timeout: Seconds to wait for a URL source
	"""

	def __init__ (self, source: Source = None, timeout: float = DEFAULT_TIMEOUT) -> None:

		"""Remember the source. Nothing is read until `load` is awaited."""

		self._source = source
		self._timeout = timeout
		self._lock = asyncio.Lock()
		self._entries: typing.Optional[typing.Tuple[chordbook.catalog.ChordEntry, ...]] = None
		self._by_name: typing.Dict[str, chordbook.catalog.ChordEntry] = {}

	@property
	def is_loaded (self) -> bool:

		"""True once `load` has completed, whether or not the source was readable."""

		return self._entries is not None

	@property
	def entries (self) -> typing.Tuple[chordbook.catalog.ChordEntry, ...]:

		"""The loaded entries in source order.

		Raises:
			RuntimeError: If `load` has not completed yet.
		"""

		if self._entries is None:
			raise RuntimeError("Chord catalog has not been loaded; await load() first")

		return self._entries

	async def load (self) -> typing.Tuple[chordbook.catalog.ChordEntry, ...]:

		"""Return every entry, reading and parsing the source on the first call."""

		if self._entries is not None:
			return self._entries

		async with self._lock:

			# Another caller may have finished the load while we waited.
			if self._entries is None:
				self._store(await self._read_entries())

		return self.entries

	async def search (
		self,
		query: str,
		limit: int = chordbook.constants.MAX_SEARCH_RESULTS
	) -> typing.List[chordbook.catalog.ChordEntry]:

		"""Rank catalog entries against a query (see `chordbook.search.rank_matches`).

		A blank query returns an empty list without loading the catalog.
		"""

		if not query.strip():
			return []

		entries = await self.load()

		return chordbook.search.rank_matches(query, entries, limit=limit)

	def get (self, name: str) -> typing.Optional[chordbook.catalog.ChordEntry]:

		"""Return the entry with this exact name, or None."""

		return self._by_name.get(name)

	def __contains__ (self, name: object) -> bool:

		return name in self._by_name

	def __len__ (self) -> int:

		return len(self._entries or ())

	async def _read_entries (self) -> typing.List[chordbook.catalog.ChordEntry]:

		"""Fetch and parse the source, falling back to an empty catalog."""

		description = _describe(self._source)

		try:
			text = await self._read_text()

		except Exception as exc:
			logger.error(f"Chord catalog unavailable ({description}): {exc}")
			return []

		entries = chordbook.catalog.parse_catalog(text)
		logger.info(f"Loaded {len(entries)} chords from {description}")

		return entries

	async def _read_text (self) -> str:

		source = self._source

		if callable(source):
			result = source()
			if inspect.isawaitable(result):
				result = await result
			return _as_text(result)

		return await asyncio.to_thread(read_source, source, self._timeout)

	def _store (self, entries: typing.List[chordbook.catalog.ChordEntry]) -> None:

		"""Freeze the entries and index them by name (first occurrence wins)."""

		by_name: typing.Dict[str, chordbook.catalog.ChordEntry] = {}

		for entry in entries:
			if entry.name in by_name:
				logger.warning(f"Duplicate chord name {entry.name!r}; lookups by name return the first one")
				continue
			by_name[entry.name] = entry

		self._by_name = by_name
		self._entries = tuple(entries)
