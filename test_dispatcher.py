import json
import logging

import storage
from data import Theme
from dispatcher import Action, Dispatcher


def _saved(kv):
    return json.loads(kv.get(storage.DEFAULT_KEY))


def test_groceries_scenario(store, kv):
    d = Dispatcher(store)

    assert d.dispatch(Action.ADD_LIST, {"name": "Groceries"})
    assert [lst.name for lst in store.lists] == ["Groceries"]
    list_id = store.lists[0].id
    assert store.selected_list_id == list_id

    assert d.dispatch(Action.ADD_TODO, {"text": "Milk"})
    todo = store.selected_list.todos[0]
    assert (todo.text, todo.completed) == ("Milk", False)

    assert d.dispatch(Action.TOGGLE_TODO, {"index": 0, "completed": True})
    assert (todo.text, todo.completed) == ("Milk", True)

    assert d.dispatch(Action.BACK_HOME, {})
    assert store.selected_list_id is None
    assert [(t.text, t.completed) for t in store.lists[0].todos] == [("Milk", True)]

    assert d.dispatch(Action.SELECT_LIST, {"id": list_id})
    assert d.dispatch(Action.DELETE_TODO, {"index": 0})
    assert store.selected_list.todos == []

    assert d.dispatch(Action.CHANGE_THEME, {"theme": "light"})
    assert store.theme == Theme.LIGHT
    assert _saved(kv)["theme"] == "light"


def test_string_action_names_are_accepted(store):
    d = Dispatcher(store)
    assert d.dispatch("ADD_LIST", {"name": "A"})
    assert len(store.lists) == 1


def test_unknown_action_warns_and_leaves_state(store, kv, caplog):
    d = Dispatcher(store)
    with caplog.at_level(logging.WARNING, logger="dispatcher"):
        assert d.dispatch("RENAME_EVERYTHING", {"name": "x"}) is False
    assert "RENAME_EVERYTHING" in caplog.text
    assert store.lists == []
    assert kv.get(storage.DEFAULT_KEY) is None


def test_validation_failures_are_suppressed(store, kv):
    d = Dispatcher(store)
    assert d.dispatch(Action.ADD_LIST, {"name": "   "}) is False
    assert d.dispatch(Action.ADD_LIST, {}) is False
    assert d.dispatch(Action.ADD_LIST, None) is False
    assert store.lists == []
    assert kv.get(storage.DEFAULT_KEY) is None

    d.dispatch(Action.ADD_LIST, {"name": "A"})
    assert d.dispatch(Action.ADD_TODO, {"text": ""}) is False
    assert d.dispatch(Action.TOGGLE_TODO, {"index": 0, "completed": "yes"}) is False
    assert d.dispatch(Action.DELETE_TODO, {"index": True}) is False
    assert d.dispatch(Action.CHANGE_THEME, {"theme": "sepia"}) is False
    assert store.selected_list.todos == []
    assert store.theme == Theme.DARK


def test_not_found_is_a_noop(store):
    d = Dispatcher(store)
    d.dispatch(Action.ADD_LIST, {"name": "A"})
    d.dispatch(Action.ADD_TODO, {"text": "x"})
    assert d.dispatch(Action.SELECT_LIST, {"id": "stale"}) is False
    assert d.dispatch(Action.EDIT_LIST, {"id": "stale", "newName": "B"}) is False
    assert d.dispatch(Action.DELETE_LIST, {"id": "stale"}) is False
    assert d.dispatch(Action.DELETE_TODO, {"index": 5}) is False
    assert d.dispatch(Action.EDIT_TODO, {"id": "stale", "newText": "y"}) is False
    assert [lst.name for lst in store.lists] == ["A"]
    assert [t.text for t in store.selected_list.todos] == ["x"]


def test_add_todo_without_selection_is_dropped(store):
    d = Dispatcher(store)
    d.dispatch(Action.ADD_LIST, {"name": "A"})
    d.dispatch(Action.BACK_HOME)
    assert d.dispatch(Action.ADD_TODO, {"text": "x"}) is False
    assert store.lists[0].todos == []


def test_edit_and_delete_list(store):
    d = Dispatcher(store)
    d.dispatch(Action.ADD_LIST, {"name": "A"})
    list_id = store.lists[0].id
    assert d.dispatch(Action.EDIT_LIST, {"id": list_id, "newName": " B "})
    assert store.lists[0].name == "B"
    assert d.dispatch(Action.DELETE_LIST, {"id": list_id})
    assert store.lists == []
    assert store.selected_list_id is None


def test_todo_actions_by_id(store):
    d = Dispatcher(store)
    d.dispatch(Action.ADD_LIST, {"name": "A"})
    d.dispatch(Action.ADD_TODO, {"text": "a"})
    d.dispatch(Action.ADD_TODO, {"text": "b"})
    b_id = store.selected_list.todos[1].id
    d.dispatch(Action.DELETE_TODO, {"index": 0})
    assert d.dispatch(Action.EDIT_TODO, {"id": b_id, "newText": "B"})
    assert d.dispatch(Action.TOGGLE_TODO, {"id": b_id, "completed": True})
    todo = store.selected_list.todos[0]
    assert (todo.text, todo.completed) == ("B", True)


def test_hooks_receive_identifiers_after_commit(store, kv):
    d = Dispatcher(store)
    seen = []
    d.on(Action.ADD_LIST, lambda details: seen.append(
        (details, _saved(kv)["selectedListId"])))
    d.on(Action.TOGGLE_TODO, seen.append)

    d.dispatch(Action.ADD_LIST, {"name": "A"})
    list_id = store.lists[0].id
    assert seen == [({"id": list_id, "name": "A"}, list_id)]

    d.dispatch(Action.ADD_TODO, {"text": "x"})
    d.dispatch(Action.TOGGLE_TODO, {"index": 0, "completed": True})
    assert seen[-1] == {"index": 0, "completed": True}


def test_hooks_not_fired_on_noop(store):
    d = Dispatcher(store)
    seen = []
    d.on("SELECT_LIST", seen.append)
    d.dispatch(Action.SELECT_LIST, {"id": "missing"})
    assert seen == []


def test_failing_hook_cannot_undo_mutation(store, caplog):
    d = Dispatcher(store)
    seen = []

    def broken(details):
        raise RuntimeError("boom")

    d.on(Action.ADD_LIST, broken)
    d.on(Action.ADD_LIST, seen.append)
    with caplog.at_level(logging.ERROR, logger="dispatcher"):
        assert d.dispatch(Action.ADD_LIST, {"name": "A"}) is True
    assert len(store.lists) == 1
    assert len(seen) == 1
    assert "Hook for ADD_LIST failed" in caplog.text


def test_remove_hook(store):
    d = Dispatcher(store)
    seen = []
    remove = d.on(Action.CHANGE_THEME, seen.append)
    d.dispatch(Action.CHANGE_THEME, {"theme": "light"})
    remove()
    d.dispatch(Action.CHANGE_THEME, {"theme": "dark"})
    assert seen == [{"theme": "light"}]
