import json
import threading

import pytest

from hitmon.persistence.log_store import LogStore, MalformedRecordError, PersistenceFailure


def _rec(zone="head", distance=42.0, actor="abc123"):
    return {"murderer_id": actor, "murderer": "Survivor", "zone": zone, "distance": distance, "weapon": "M4A1"}


def test_append_and_read_returns_full_ordered_snapshot(tmp_path):
    store = LogStore(tmp_path / "logs")
    store.append("abc123", _rec("torso", 10))
    events = store.append_and_read("abc123", _rec("head", 20))
    assert [(e.zone, e.distance) for e in events] == [("torso", 10.0), ("head", 20.0)]
    assert events[-1].subject_name == "Survivor"
    lines = (tmp_path / "logs" / "abc123.log").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    # ham gövde olduğu gibi saklanır
    assert json.loads(lines[0])["weapon"] == "M4A1"


def test_unknown_actor_reads_empty(tmp_path):
    store = LogStore(tmp_path)
    assert store.read("nobody") == []
    assert not store.exists("nobody")


@pytest.mark.parametrize("actor", ["../etc/passwd", "a/b", "", "x" * 129])
def test_actor_id_must_stay_inside_root(tmp_path, actor):
    with pytest.raises(ValueError):
        LogStore(tmp_path).path_for(actor)


def test_malformed_line_is_reported_with_position(tmp_path):
    store = LogStore(tmp_path)
    store.append("abc123", _rec())
    with (tmp_path / "abc123.log").open("a", encoding="utf-8") as f:
        f.write("{not json\n")
    with pytest.raises(MalformedRecordError) as exc:
        store.read("abc123")
    assert exc.value.line_no == 2
    assert isinstance(exc.value, PersistenceFailure)


def test_record_missing_fields_is_malformed(tmp_path):
    (tmp_path / "abc123.log").write_text('{"murderer_id": "abc123", "zone": "head"}\n', encoding="utf-8")
    with pytest.raises(MalformedRecordError):
        LogStore(tmp_path).read("abc123")


def test_unwritable_root_raises_persistence_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    store = LogStore(blocker / "logs")
    with pytest.raises(PersistenceFailure):
        store.append("abc123", _rec())


def test_concurrent_appends_for_one_actor_are_serialized(tmp_path):
    store = LogStore(tmp_path)
    sizes = []

    def worker():
        for _ in range(25):
            sizes.append(len(store.append_and_read("abc123", _rec())))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    # her snapshot kendi yazımını içerir, boyutlar benzersiz
    assert sorted(sizes) == list(range(1, 101))
