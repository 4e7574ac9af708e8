import os, sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))
import asyncio
import pytest
from scorebot.repositories.csv_store import CsvScoreStore

def _seed(tmp_path) -> CsvScoreStore:
    data_dir = tmp_path / "data"
    os.makedirs(data_dir, exist_ok=True)
    store = CsvScoreStore(str(data_dir))
    store.users.append_row({"username": "ann", "fullname": "Ann Lee", "group_id": "KP-01",
                            "student_id": 12, "telegram_id": None})
    store.users.append_row({"username": "bob", "fullname": "Bob Ray", "group_id": "KP-02",
                            "student_id": "", "telegram_id": "555"})
    store.tasks.append_row({"id": "t1", "module_id": "progbase", "type": "task", "title": "HW 1",
                            "score": 10, "is_extra": "false", "is_published": "true"})
    store.tasks.append_row({"id": "e1", "module_id": "progbase", "type": "lab", "title": "Bonus",
                            "score": 2.5, "is_extra": True, "is_published": False})
    store.tasks.append_row({"id": "w1", "module_id": "webprogbase", "type": "test", "title": "Quiz",
                            "score": 5, "is_extra": 0, "is_published": 1})
    store.results.append_row({"username": "ann", "course": "progbase", "task": "t1",
                              "updtime": "2024-01-01T10:00", "commit": "aaa", "score": 3,
                              "checktime": "2024-01-02T10:00", "notified_at": "2024-01-02T10:01"})
    store.results.append_row({"username": "ann", "course": "progbase", "task": "t1",
                              "updtime": "2024-02-01T10:00", "commit": "bbb", "score": 9,
                              "checktime": "2024-02-02T10:00", "comment": "better"})
    store.results.append_row({"username": "ann", "course": "progbase", "task": "e1",
                              "updtime": "2024-02-03T10:00", "commit": "ccc"})
    store.results.append_row({"username": "bob", "course": "progbase", "task": "t1",
                              "updtime": "2024-02-04T10:00", "commit": "ddd", "score": 10})
    return store

def test_lookup_user(tmp_path):
    store = _seed(tmp_path)
    ann = asyncio.run(store.lookup_user_by_handle("ann"))
    assert ann.fullname == "Ann Lee"
    assert ann.student_id == 12
    assert ann.telegram_id is None
    bob = asyncio.run(store.lookup_user_by_handle("bob"))
    assert bob.student_id is None
    assert bob.telegram_id == "555"
    assert asyncio.run(store.lookup_user_by_handle("carol")) is None

def test_set_push_target(tmp_path):
    store = _seed(tmp_path)
    asyncio.run(store.set_push_target("ann", "4242"))
    assert asyncio.run(store.lookup_user_by_handle("ann")).telegram_id == "4242"
    assert asyncio.run(store.lookup_user_by_handle("bob")).telegram_id == "555"

def test_set_push_target_for_unknown_handle(tmp_path):
    store = _seed(tmp_path)
    with pytest.raises(LookupError):
        asyncio.run(store.set_push_target("carol", "1"))

def test_list_tasks_for_module(tmp_path):
    store = _seed(tmp_path)
    tasks = {t.id: t for t in asyncio.run(store.list_tasks_for_module("progbase"))}
    assert set(tasks) == {"t1", "e1"}
    assert tasks["t1"].kind == "task"
    assert tasks["t1"].score == 10
    assert not tasks["t1"].is_extra and tasks["t1"].is_published
    assert tasks["e1"].score == 2.5
    assert tasks["e1"].is_extra and not tasks["e1"].is_published
    assert asyncio.run(store.list_tasks_for_module("nope")) == []

def test_results_keep_latest_submission_per_task(tmp_path):
    store = _seed(tmp_path)
    results = {r.task: r for r in asyncio.run(store.list_results_for_user_and_module("ann", "progbase"))}
    assert set(results) == {"t1", "e1"}
    assert results["t1"].score == 9
    assert results["t1"].comment == "better"
    assert results["e1"].score is None
    assert results["e1"].checktime is None
    assert asyncio.run(store.list_results_for_user_and_module("ann", "webprogbase")) == []

def test_pending_notifications_and_mark(tmp_path):
    store = _seed(tmp_path)
    pending = asyncio.run(store.list_unnotified_checked_results())
    assert [(r.username, r.commit) for r in pending] == [("ann", "bbb")]
    asyncio.run(store.mark_notified(pending[0]))
    assert asyncio.run(store.list_unnotified_checked_results()) == []
    row = store.results.find(commit="bbb").iloc[0]
    assert row["notified_at"] != ""

def test_newer_unchecked_submission_keeps_checked_score(tmp_path):
    store = CsvScoreStore(str(tmp_path / "data"))
    store.results.append_row({"username": "ann", "course": "progbase", "task": "t1",
                              "updtime": "2024-01-01T10:00", "commit": "a", "score": 9,
                              "checktime": "2024-01-02T10:00"})
    store.results.append_row({"username": "ann", "course": "progbase", "task": "t1",
                              "updtime": "2024-03-01T10:00", "commit": "b"})
    store.results.append_row({"username": "ann", "course": "progbase", "task": "t2",
                              "updtime": "2024-03-02T10:00", "commit": "c"})
    store.results.append_row({"username": "ann", "course": "progbase", "task": "t2",
                              "updtime": "2024-03-05T10:00", "commit": "d"})
    results = {r.task: r for r in asyncio.run(store.list_results_for_user_and_module("ann", "progbase"))}
    assert results["t1"].commit == "a"
    assert results["t1"].score == 9
    assert results["t2"].commit == "d"
