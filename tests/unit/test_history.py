"""Unit tests for the local history store."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from reelsmith.history import GeneratedVideoRecord, HistoryStore, dumps_records


def _record(n: int) -> GeneratedVideoRecord:
    return GeneratedVideoRecord(
        id=f"rec{n}",
        text=f"video number {n}",
        style="modern",
        duration=30,
        video_path=f"/videos/video-rec{n}.mp4",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=n),
    )


def test_missing_file_is_empty_history(tmp_path) -> None:
    store = HistoryStore(tmp_path / "history.json")
    assert store.records == []
    assert len(store) == 0


def test_eleven_generations_keep_ten_newest_first(tmp_path) -> None:
    store = HistoryStore(tmp_path / "history.json", limit=10)

    evicted = []
    for n in range(1, 12):
        evicted.extend(store.append(_record(n)))

    assert [r.id for r in store.records] == [f"rec{n}" for n in range(11, 1, -1)]
    assert [r.id for r in evicted] == ["rec1"]
    assert store.is_full


def test_persist_on_mutate_and_load_on_init(tmp_path) -> None:
    path = tmp_path / "nested" / "history.json"
    store = HistoryStore(path)
    store.append(_record(1))
    store.append(_record(2))

    reloaded = HistoryStore(path)
    assert [r.id for r in reloaded.records] == ["rec2", "rec1"]
    assert reloaded.get("rec1") == _record(1)
    assert reloaded.get("missing") is None

    on_disk = json.loads(path.read_text())
    assert [item["id"] for item in on_disk] == ["rec2", "rec1"]


def test_clear_removes_file(tmp_path) -> None:
    path = tmp_path / "history.json"
    store = HistoryStore(path)
    store.append(_record(1))

    removed = store.clear()

    assert [r.id for r in removed] == ["rec1"]
    assert store.records == []
    assert not path.exists()
    assert HistoryStore(path).records == []


def test_corrupt_file_loads_as_empty(tmp_path) -> None:
    path = tmp_path / "history.json"
    path.write_text("{not json")

    store = HistoryStore(path)
    assert store.records == []

    store.append(_record(1))
    assert [r.id for r in HistoryStore(path).records] == ["rec1"]


def test_non_utf8_file_loads_as_empty(tmp_path) -> None:
    path = tmp_path / "history.json"
    path.write_bytes(b"\xff\xfe[garbage")

    store = HistoryStore(path)
    assert store.records == []

    store.append(_record(2))
    assert [r.id for r in HistoryStore(path).records] == ["rec2"]


def test_file_written_under_larger_limit_is_trimmed(tmp_path) -> None:
    path = tmp_path / "history.json"
    big = HistoryStore(path, limit=5)
    for n in range(5):
        big.append(_record(n))

    small = HistoryStore(path, limit=3)
    assert [r.id for r in small.records] == ["rec4", "rec3", "rec2"]


def test_records_returns_a_copy(tmp_path) -> None:
    store = HistoryStore(tmp_path / "history.json")
    store.append(_record(1))

    store.records.clear()
    assert len(store) == 1


def test_limit_must_be_positive(tmp_path) -> None:
    with pytest.raises(ValueError):
        HistoryStore(tmp_path / "history.json", limit=0)


def test_record_defaults_and_download_name() -> None:
    record = GeneratedVideoRecord(text="t", style="minimal", duration=15, video_path="/v.mp4")
    assert record.id
    assert record.created_at.tzinfo is not None
    assert record.download_name == f"video-{record.id}.mp4"


def test_dumps_records_is_json() -> None:
    payload = json.loads(dumps_records([_record(1)]))
    assert payload[0]["id"] == "rec1"
    assert payload[0]["created_at"].startswith("2026-01-01T00:01:00")
