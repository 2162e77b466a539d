import json
import threading
from pathlib import Path

import pytest
from sqlmodel import Session

from core.database import make_engine
from core.exceptions import StoreReadError, UnknownTagError
from models.models import KVEntry
from schemas.build_schema import BuildCreate
from services.store_service import (
    FileBuildStore,
    KVBuildStore,
    load_seed_records,
    next_build_id,
)

from tests.factory import DESCRIPTION, TODAY, make_record

REPO_ROOT = Path(__file__).resolve().parents[2]


def new_build(name: str = "Quiz Maker", **overrides) -> BuildCreate:
    data = dict(
        project_name=name,
        builder_name="Sam Rivera",
        school="Rice University",
        github_url="https://github.com/sam/quiz-maker",
        description=DESCRIPTION,
        tags=["tool"],
    )
    data.update(overrides)
    return BuildCreate(**data)


# ================================================================
#  Shared contract (runs against both backends)
# ================================================================
def test_ids_continue_after_seed_set(store):
    first = store.append(new_build("First"))
    second = store.append(new_build("Second"))
    assert first.id == "004"
    assert int(second.id) == int(first.id) + 1


def test_append_sets_date_and_featured(store):
    record = store.append(new_build())
    assert record.submitted_at == TODAY
    assert record.featured is False
    assert record.github_url == "https://github.com/sam/quiz-maker"


def test_read_all_returns_only_persisted_records(store):
    assert store.read_all() == []
    record = store.append(new_build())
    assert store.read_all() == [record]


def test_read_all_is_idempotent(store):
    store.append(new_build("One"))
    store.append(new_build("Two"))
    assert store.read_all() == store.read_all()


def test_unknown_tags_are_rejected_before_writing(store):
    with pytest.raises(UnknownTagError):
        store.append(new_build(tags=["tool", "blockchain"]))
    assert store.read_all() == []


def test_concurrent_appends_get_distinct_ids(store):
    results = []

    def submit(n):
        results.append(store.append(new_build(f"Build {n}")))

    threads = [threading.Thread(target=submit, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(r.id for r in results) == [f"{n:03d}" for n in range(4, 12)]
    assert len(store.read_all()) == 8


# ================================================================
#  Id generation
# ================================================================
def test_next_build_id():
    assert next_build_id([]) == "001"
    assert next_build_id([make_record("041", "2025-01-01"), make_record("007", "2025-01-01")]) == "042"
    assert next_build_id([make_record("999", "2025-01-01")]) == "1000"
    assert next_build_id([make_record("legacy", "2025-01-01"), make_record("002", "2025-01-01")]) == "003"


def test_seed_ids_count_towards_next_id(tmp_path):
    store = FileBuildStore(
        tmp_path / "builds.json",
        seed_records=[make_record("120", "2025-01-01")],
        today=lambda: TODAY,
    )
    store.initialize()
    assert store.append(new_build()).id == "121"


def test_ids_start_at_001_without_seed(tmp_path):
    store = FileBuildStore(tmp_path / "builds.json", today=lambda: TODAY)
    store.initialize()
    assert store.append(new_build()).id == "001"


# ================================================================
#  Flat-file backend
# ================================================================
def test_file_document_shape(file_store):
    file_store.append(new_build())
    document = json.loads(file_store.path.read_text(encoding="utf-8"))

    assert list(document) == ["builds"]
    stored = document["builds"][0]
    assert stored["projectName"] == "Quiz Maker"
    assert stored["submittedAt"] == "2025-02-01"
    assert stored["featured"] is False
    assert "websiteUrl" not in stored
    assert "videoUrl" not in stored


def test_file_missing_is_a_read_error(tmp_path):
    store = FileBuildStore(tmp_path / "nope.json")
    with pytest.raises(StoreReadError):
        store.read_all()


def test_file_corrupt_is_a_read_error(tmp_path):
    path = tmp_path / "builds.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreReadError):
        FileBuildStore(path).read_all()

    path.write_text(json.dumps({"builds": "oops"}), encoding="utf-8")
    with pytest.raises(StoreReadError):
        FileBuildStore(path).read_all()


def test_file_initialize_keeps_existing_document(tmp_path):
    path = tmp_path / "builds.json"
    path.write_text(json.dumps({"builds": [make_record("010", "2025-01-01").to_document()]}), encoding="utf-8")
    store = FileBuildStore(path)
    store.initialize()
    assert [r.id for r in store.read_all()] == ["010"]


def test_file_records_are_not_revalidated_on_read(tmp_path):
    path = tmp_path / "builds.json"
    legacy = make_record("010", "2025-01-01", description="short", tags=["retro"]).to_document()
    path.write_text(json.dumps({"builds": [legacy]}), encoding="utf-8")
    assert FileBuildStore(path).read_all()[0].tags == ["retro"]


# ================================================================
#  Key-value backend
# ================================================================
def test_kv_seed_is_never_written(kv_store):
    kv_store.append(new_build())
    assert [r.id for r in kv_store.read_all()] == ["004"]
    assert len(kv_store.seed_records) == 3


def test_kv_append_stamps_update_time(kv_store):
    kv_store.append(new_build("One"))
    with Session(kv_store.engine) as session:
        first = session.get(KVEntry, kv_store.key).updated_at

    kv_store.append(new_build("Two"))
    with Session(kv_store.engine) as session:
        second = session.get(KVEntry, kv_store.key).updated_at

    assert first is not None
    assert second >= first
    assert [r.id for r in kv_store.read_all()] == ["004", "005"]


def test_kv_corrupt_value_is_a_read_error(kv_store):
    kv_store._save([])

    with Session(kv_store.engine) as session:
        entry = session.get(KVEntry, kv_store.key)
        entry.value = "{broken"
        session.add(entry)
        session.commit()

    with pytest.raises(StoreReadError):
        kv_store.read_all()


def test_kv_unreachable_is_a_read_error(tmp_path):
    # Table never created
    store = KVBuildStore(make_engine(f"sqlite:///{tmp_path / 'empty.db'}"), "submissions")
    with pytest.raises(StoreReadError):
        store.read_all()


# ================================================================
#  Seed set
# ================================================================
def test_load_seed_records_missing_file(tmp_path):
    assert load_seed_records(str(tmp_path / "missing.json")) == []
    assert load_seed_records(None) == []


def test_bundled_seed_file_is_valid():
    records = load_seed_records(str(REPO_ROOT / "data" / "seed_builds.json"))
    assert [r.id for r in records] == ["001", "002", "003"]
    assert records[0].featured is True
