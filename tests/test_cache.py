import asyncio
import logging
import pathlib
import urllib.error
import urllib.request

import pytest

import chordbook.cache
import chordbook.errors


class CountingSource:

	"""Async catalog source that records how often it is read."""

	def __init__ (self, text: str, delay: float = 0.0) -> None:

		"""Store the text to return and an optional delay per read."""

		self.text = text
		self.delay = delay
		self.calls = 0

	async def __call__ (self) -> str:

		self.calls += 1
		await asyncio.sleep(self.delay)
		return self.text


@pytest.mark.asyncio
async def test_load_parses_once (sample_text: str) -> None:

	"""Later loads return the stored tuple without reading again."""

	source = CountingSource(sample_text)
	catalog = chordbook.cache.ChordCatalog(source)

	first = await catalog.load()
	second = await catalog.load()

	assert source.calls == 1
	assert first is second
	assert isinstance(first, tuple)
	assert len(first) == 8


@pytest.mark.asyncio
async def test_concurrent_first_loads_share_one_read (sample_text: str) -> None:

	"""Callers arriving while the first load is in flight wait for it."""

	source = CountingSource(sample_text, delay=0.05)
	catalog = chordbook.cache.ChordCatalog(source)

	results = await asyncio.gather(*(catalog.load() for _ in range(10)))

	assert source.calls == 1
	assert all(result is results[0] for result in results)


@pytest.mark.asyncio
async def test_sync_callable_source (sample_text: str) -> None:

	"""A plain function returning text also works as a source."""

	catalog = chordbook.cache.ChordCatalog(lambda: sample_text)

	entries = await catalog.load()

	assert entries[0].name == "C"


@pytest.mark.asyncio
async def test_path_source (tmp_path: pathlib.Path, sample_text: str) -> None:

	"""A file path is read in a worker thread."""

	path = tmp_path / "chords.csv"
	path.write_text(sample_text, encoding="utf-8")

	catalog = chordbook.cache.ChordCatalog(path)
	entries = await catalog.load()

	assert [entry.name for entry in entries][:3] == ["C", "Cm", "Cmaj7"]

	# The same path given as a string.
	assert len(await chordbook.cache.ChordCatalog(str(path)).load()) == len(entries)


@pytest.mark.asyncio
async def test_bundled_source () -> None:

	"""The default source is the catalog shipped with the package."""

	catalog = chordbook.cache.ChordCatalog()

	entries = await catalog.load()

	assert len(entries) == 180
	assert "Cmaj7" in catalog


@pytest.mark.asyncio
async def test_missing_file_gives_empty_catalog (tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture) -> None:

	"""An unreadable source is logged and the catalog stays empty."""

	catalog = chordbook.cache.ChordCatalog(tmp_path / "missing.csv")

	with caplog.at_level(logging.ERROR, logger="chordbook.cache"):
		entries = await catalog.load()

	assert entries == ()
	assert catalog.is_loaded
	assert len(catalog) == 0
	assert "unavailable" in caplog.text


@pytest.mark.asyncio
async def test_failing_callable_gives_empty_catalog () -> None:

	"""Exceptions from a source callable never reach the caller."""

	calls = []

	def broken () -> str:
		calls.append(1)
		raise ConnectionError("network down")

	catalog = chordbook.cache.ChordCatalog(broken)

	assert await catalog.load() == ()
	assert await catalog.load() == ()

	# The failure is remembered; the source is not retried.
	assert len(calls) == 1


def test_read_source_wraps_errors (tmp_path: pathlib.Path) -> None:

	"""read_source raises SourceUnavailable, which is also an OSError."""

	with pytest.raises(chordbook.errors.SourceUnavailable):
		chordbook.cache.read_source(tmp_path / "missing.csv")

	bad = tmp_path / "bad.csv"
	bad.write_bytes(b"\xff\xfe\xfa")

	with pytest.raises(OSError):
		chordbook.cache.read_source(bad)


def test_entries_before_load () -> None:

	"""The entries view is only available after loading."""

	catalog = chordbook.cache.ChordCatalog(lambda: "")

	assert not catalog.is_loaded

	with pytest.raises(RuntimeError):
		catalog.entries


@pytest.mark.asyncio
async def test_get_by_name (sample_text: str) -> None:

	"""Entries can be looked up by exact name after loading."""

	catalog = chordbook.cache.ChordCatalog(lambda: sample_text)
	await catalog.load()

	assert catalog.get("Fm6").pitches == (65, 68, 72, 74)
	assert catalog.get("fm6") is None
	assert "Fdim7" in catalog
	assert "Nope" not in catalog


@pytest.mark.asyncio
async def test_duplicate_names_keep_first (caplog: pytest.LogCaptureFixture) -> None:

	"""Repeated names stay in the sequence; name lookup returns the first."""

	text = "\n".join([
		"Name,Notes,Type,Extension",
		'C,"C,E,G",Major,Triad',
		'C,"C,E,G,B",Major,7th',
	])

	catalog = chordbook.cache.ChordCatalog(lambda: text)
	entries = await catalog.load()

	assert len(entries) == 2
	assert catalog.get("C").subcategory == "Triad"
	assert "Duplicate chord name" in caplog.text


@pytest.mark.asyncio
async def test_search_blank_query_skips_load (sample_text: str) -> None:

	"""A blank query does not trigger the first load."""

	source = CountingSource(sample_text)
	catalog = chordbook.cache.ChordCatalog(source)

	assert await catalog.search("  ") == []
	assert source.calls == 0
	assert not catalog.is_loaded


@pytest.mark.asyncio
async def test_search_loads_and_ranks (sample_text: str) -> None:

	"""search() loads on demand and ranks the exact match first."""

	source = CountingSource(sample_text)
	catalog = chordbook.cache.ChordCatalog(source)

	result = await catalog.search("c")

	assert result[0].name == "C"
	assert source.calls == 1


@pytest.mark.asyncio
async def test_separate_handles_are_independent (sample_text: str) -> None:

	"""Each handle owns its own catalog."""

	first = chordbook.cache.ChordCatalog(lambda: sample_text)
	second = chordbook.cache.ChordCatalog(lambda: "Name,Notes,Type,Extension\n")

	assert len(await first.load()) == 8
	assert len(await second.load()) == 0


@pytest.mark.asyncio
async def test_bytes_callable_source (sample_text: str) -> None:

	"""A callable may return UTF-8 bytes instead of text."""

	catalog = chordbook.cache.ChordCatalog(lambda: sample_text.encode("utf-8"))

	entries = await catalog.load()

	assert len(entries) == 8
	assert entries[0].name == "C"


@pytest.mark.asyncio
async def test_non_text_callable_gives_empty_catalog (caplog: pytest.LogCaptureFixture) -> None:

	"""A callable returning something other than text or bytes leaves the catalog empty."""

	catalog = chordbook.cache.ChordCatalog(lambda: None)

	with caplog.at_level(logging.ERROR, logger="chordbook.cache"):
		entries = await catalog.load()

	assert entries == ()
	assert catalog.is_loaded
	assert "unavailable" in caplog.text
	assert "NoneType" in caplog.text


class FakeResponse:

	"""Stands in for the object returned by urlopen."""

	def __init__ (self, body: bytes) -> None:

		self.body = body

	def __enter__ (self) -> "FakeResponse":

		return self

	def __exit__ (self, *exc_info: object) -> None:

		return None

	def read (self) -> bytes:

		return self.body


@pytest.mark.asyncio
async def test_url_source (monkeypatch: pytest.MonkeyPatch, sample_text: str) -> None:

	"""An http(s) source is fetched with the configured timeout."""

	requests = []

	def fake_urlopen (url: str, timeout: float) -> FakeResponse:
		requests.append((url, timeout))
		return FakeResponse(sample_text.encode("utf-8"))

	monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

	catalog = chordbook.cache.ChordCatalog("https://example.test/chords.csv", timeout=3.5)
	entries = await catalog.load()

	assert requests == [("https://example.test/chords.csv", 3.5)]
	assert len(entries) == 8
	assert catalog.get("Fm6") is not None


@pytest.mark.asyncio
async def test_unreachable_url_gives_empty_catalog (monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:

	"""A network failure is logged and the catalog stays empty."""

	def fake_urlopen (url: str, timeout: float) -> FakeResponse:
		raise urllib.error.URLError("down")

	monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

	catalog = chordbook.cache.ChordCatalog("http://example.test/chords.csv")

	with caplog.at_level(logging.ERROR, logger="chordbook.cache"):
		entries = await catalog.load()

	assert entries == ()
	assert "unavailable" in caplog.text

	with pytest.raises(chordbook.errors.SourceUnavailable):
		chordbook.cache.read_source("http://example.test/chords.csv")
