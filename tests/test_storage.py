import json

import pytest

from conftest import BASE_LAT, BASE_LON, make_shot
from learning.settings import KnowledgeSettings
from models import CourseKnowledge
from storage import (
    CorruptRecordError,
    InMemoryKnowledgeStore,
    JsonFileKnowledgeStore,
    KnowledgeManager,
    NotFoundError,
)


def _round(prefix: str):
    return [
        make_shot(f"{prefix}-1", number=1, club="driver"),
        make_shot(f"{prefix}-2", number=2, north=300.0, club="7i"),
        make_shot(f"{prefix}-3", number=3, north=380.0, club="putter"),
        make_shot(f"{prefix}-4", number=4, north=380.5),
    ]


# ================================================================
# Stores
# ================================================================

def test_json_file_store_round_trip(tmp_path, clock):
    store = JsonFileKnowledgeStore(tmp_path / "nested" / "knowledge.json")
    assert store.load_all() == {}

    course = CourseKnowledge(course_id="c1")
    course.process_round(_round("r1"), clock=clock)
    store.save_all({"c1": course.to_record()})

    loaded = store.load_all()
    assert list(loaded) == ["c1"]
    assert CourseKnowledge.from_record(loaded["c1"]).to_record() == course.to_record()


def test_json_file_store_corrupt_file(tmp_path):
    path = tmp_path / "knowledge.json"
    path.write_text("{not json")
    with pytest.raises(CorruptRecordError):
        JsonFileKnowledgeStore(path).load_all()

    path.write_text(json.dumps(["not", "a", "mapping"]))
    with pytest.raises(CorruptRecordError):
        JsonFileKnowledgeStore(path).load_all()


def test_in_memory_store_hands_out_copies():
    store = InMemoryKnowledgeStore({"c1": {"courseId": "c1"}})
    records = store.load_all()
    records["c1"]["courseId"] = "tampered"
    assert store.load_all()["c1"]["courseId"] == "c1"
    assert InMemoryKnowledgeStore().load_all() == {}


# ================================================================
# KnowledgeManager
# ================================================================

@pytest.fixture
def manager(clock):
    return KnowledgeManager(store=InMemoryKnowledgeStore(), clock=clock)


def test_get_course_knowledge_creates_and_persists(manager):
    knowledge = manager.get_course_knowledge("c1")
    assert knowledge.course_id == "c1"
    assert manager.get_course_knowledge("c1") is knowledge
    assert "c1" in manager.store.load_all()
    assert manager.course_ids() == ["c1"]


def test_process_round_then_query(manager):
    accepted = manager.process_round(_round("r1"), "c1", contributor_id="dev-1")
    assert accepted == 4

    result = manager.get_distance_to_pin("c1", 1, BASE_LAT, BASE_LON)
    assert result.type == "pin"
    assert result.distance == pytest.approx(380.2, abs=0.5)

    assert len(manager.get_tee_boxes("c1", 1)) == 1
    assert manager.get_green_boundary("c1", 1).sample_count == 2
    assert len(manager.get_pin_history("c1", 1)) == 1
    assert manager.get_tee_boxes("c1", 2) == []
    assert manager.get_green_boundary("c1", 2) is None

    summary = manager.get_course_summary("c1")
    assert summary["contributor_count"] == 1


def test_process_shot_persists_and_reloads(clock):
    store = InMemoryKnowledgeStore()
    first = KnowledgeManager(store=store, clock=clock)
    shots = _round("r1")
    for s in shots:
        assert first.process_shot(s, shots, "c1") is True

    second = KnowledgeManager(store=store, clock=clock)
    original = first.get_distance_to_pin("c1", 1, BASE_LAT, BASE_LON)
    reloaded = second.get_distance_to_pin("c1", 1, BASE_LAT, BASE_LON)
    assert reloaded == original


def test_rejected_shot_is_not_learned(manager):
    fuzzy = make_shot("fuzzy", accuracy=250.0)
    assert manager.process_shot(fuzzy, [fuzzy], "c1") is False
    assert manager.get_tee_boxes("c1", 1) == []


def test_validation_can_be_disabled(clock):
    manager = KnowledgeManager(
        store=InMemoryKnowledgeStore(),
        clock=clock,
        settings=KnowledgeSettings(validate_shots=False),
    )
    fuzzy = make_shot("fuzzy", accuracy=250.0)
    assert manager.process_shot(fuzzy, [fuzzy], "c1") is True
    assert len(manager.get_tee_boxes("c1", 1)) == 1


def test_process_round_skips_outliers(manager):
    shots = [make_shot(f"s{i}", number=i + 1, north=float(i), club="driver") for i in range(9)]
    shots.append(make_shot("gps-glitch", number=10, north=8000.0, club="putter"))

    assert manager.process_round(shots, "c1") == 9
    assert manager.get_pin_history("c1", 1) == []


def test_export_import_and_clear(manager):
    manager.process_round(_round("r1"), "c1")

    with pytest.raises(NotFoundError):
        manager.export_knowledge("missing")

    record = manager.export_knowledge("c1")
    manager.import_knowledge("c2", record)
    assert manager.get_course_knowledge("c2").course_id == "c2"
    assert manager.get_distance_to_pin("c2", 1, BASE_LAT, BASE_LON) is not None

    manager.clear_knowledge("c1")
    assert manager.course_ids() == ["c2"]

    manager.clear_knowledge()
    assert manager.course_ids() == []
    assert manager.store.load_all() == {}


def test_refresh_ages_pins(manager, clock):
    manager.process_round(_round("r1"), "c1")
    clock.advance(days=1)
    manager.refresh()

    pin = manager.get_course_knowledge("c1").get_hole(1).pin
    assert pin.current.confidence == 0.5
    assert pin.current.last_updated == clock.now()
