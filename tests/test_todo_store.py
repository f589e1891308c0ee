# tests/test_todo_store.py

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from todo_webmcp.todos.todo_models import OwnerID
from todo_webmcp.todos.todo_store import TodoStore, TodoStoreError

ALICE = OwnerID("a" * 32)
BOB = OwnerID("b" * 32)


def test_list_is_empty_for_new_owner(store: TodoStore) -> None:
    assert store.list_todos(ALICE) == []


def test_add_then_list_round_trip(store: TodoStore) -> None:
    todo = store.add_todo(ALICE, "Buy milk")
    assert todo.id == 1
    assert todo.completed is False

    items = store.list_todos(ALICE)
    assert len(items) == 1
    assert items[0].id == todo.id
    assert items[0].description == "Buy milk"
    assert items[0].completed is False
    assert items[0].owner_id == ALICE


def test_list_is_ascending_by_id(store: TodoStore) -> None:
    ids = [store.add_todo(ALICE, f"item {i}").id for i in range(5)]
    store.toggle_todo(ALICE, ids[3])
    store.toggle_todo(ALICE, ids[0])
    store.delete_todo(ALICE, ids[2])

    listed = [t.id for t in store.list_todos(ALICE)]
    assert listed == sorted(listed)
    assert listed == [ids[0], ids[1], ids[3], ids[4]]


def test_owners_are_isolated(store: TodoStore) -> None:
    a = store.add_todo(ALICE, "alice's")
    store.add_todo(BOB, "bob's")

    assert [t.description for t in store.list_todos(ALICE)] == ["alice's"]
    assert [t.description for t in store.list_todos(BOB)] == ["bob's"]

    assert store.toggle_todo(BOB, a.id) is False
    assert store.delete_todo(BOB, a.id) is False

    items = store.list_todos(ALICE)
    assert len(items) == 1
    assert items[0].completed is False


def test_toggle_is_its_own_inverse(store: TodoStore) -> None:
    todo = store.add_todo(ALICE, "flip")

    assert store.toggle_todo(ALICE, todo.id) is True
    assert store.list_todos(ALICE)[0].completed is True

    assert store.toggle_todo(ALICE, todo.id) is True
    assert store.list_todos(ALICE)[0].completed is False


def test_delete_missing_is_false_every_time(store: TodoStore) -> None:
    todo = store.add_todo(ALICE, "gone soon")

    assert store.delete_todo(ALICE, todo.id) is True
    assert store.delete_todo(ALICE, todo.id) is False
    assert store.delete_todo(ALICE, 99) is False
    assert store.delete_todo(ALICE, 99) is False
    assert store.list_todos(ALICE) == []


def test_toggle_missing_or_zero_id_is_false(store: TodoStore) -> None:
    store.add_todo(ALICE, "x")
    assert store.toggle_todo(ALICE, 0) is False
    assert store.toggle_todo(ALICE, 42) is False


def test_empty_description_is_rejected_by_storage(store: TodoStore) -> None:
    with pytest.raises(TodoStoreError):
        store.add_todo(ALICE, "")
    assert store.list_todos(ALICE) == []


def test_rows_survive_reopen(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "todos.db"
    first = TodoStore(db)
    first.add_todo(ALICE, "persisted")
    first.close()

    second = TodoStore(db)
    try:
        assert second.count_todos() == 1
        assert [t.description for t in second.list_todos(ALICE)] == ["persisted"]
        # AUTOINCREMENT keeps counting from the stored sequence.
        assert second.add_todo(ALICE, "next").id == 2
    finally:
        second.close()


def test_closed_store_raises_store_error(tmp_path: Path) -> None:
    store = TodoStore(tmp_path / "todos.db")
    store.close()
    with pytest.raises(TodoStoreError):
        store.list_todos(ALICE)


def test_concurrent_inserts_return_their_own_ids(store: TodoStore) -> None:
    owners = [OwnerID(f"{i:032x}") for i in range(8)]
    per_owner = 150

    def insert_many(idx: int) -> list[tuple[int, str]]:
        owner = owners[idx]
        return [
            (store.add_todo(owner, f"{idx}-{n}").id, f"{idx}-{n}") for n in range(per_owner)
        ]

    with ThreadPoolExecutor(max_workers=len(owners)) as pool:
        results = list(pool.map(insert_many, range(len(owners))))

    returned = [pair for chunk in results for pair in chunk]
    assert len({todo_id for todo_id, _ in returned}) == len(owners) * per_owner

    for idx, owner in enumerate(owners):
        stored = {t.id: t.description for t in store.list_todos(owner)}
        assert stored == dict(results[idx])


def test_concurrent_toggle_and_delete_report_their_own_match(store: TodoStore) -> None:
    owned = store.add_todo(ALICE, "busy row")
    rounds = 1000
    start = threading.Barrier(4)
    wrong: list[str] = []

    def toggler() -> None:
        start.wait()
        for _ in range(rounds):
            if not store.toggle_todo(ALICE, owned.id):
                wrong.append("toggle reported a miss")

    def deleter() -> None:
        start.wait()
        for _ in range(rounds):
            if store.delete_todo(ALICE, 99999):
                wrong.append("delete of missing id reported a hit")

    threads = [threading.Thread(target=fn) for fn in (toggler, toggler, deleter, deleter)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert wrong == []
    # 2 * rounds toggles is even, so the row ends where it started.
    assert store.list_todos(ALICE)[0].completed is False
