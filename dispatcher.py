"""Action dispatcher: routes named user intents to Store operations.

Usage:
    dispatcher = Dispatcher(store)
    dispatcher.on(Action.ADD_LIST, lambda details: print(details["id"]))
    dispatcher.dispatch(Action.ADD_LIST, {"name": "Groceries"})

Each action performs exactly one Store call. Hooks run after the mutation has
been committed and cannot undo or alter it.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from errors import NotFound, ValidationError
from store import Store

logger = logging.getLogger(__name__)

Payload = dict[str, Any]
Hook = Callable[[Payload], None]


class Action(StrEnum):
    ADD_LIST = "ADD_LIST"
    SELECT_LIST = "SELECT_LIST"
    EDIT_LIST = "EDIT_LIST"
    DELETE_LIST = "DELETE_LIST"
    ADD_TODO = "ADD_TODO"
    EDIT_TODO = "EDIT_TODO"
    DELETE_TODO = "DELETE_TODO"
    TOGGLE_TODO = "TOGGLE_TODO"
    CHANGE_THEME = "CHANGE_THEME"
    BACK_HOME = "BACK_HOME"


# ── Payload checks ────────────────────────────────────────────────────────────

def _text(payload: Payload, key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{key!r} must be a non-empty string")
    return value.strip()


def _list_id(payload: Payload) -> str:
    value = payload.get("id")
    if not isinstance(value, str) or not value:
        raise ValidationError("'id' must be a list id")
    return value


def _todo_ref(payload: Payload) -> tuple[str, int | str]:
    """A todo is addressed by stable 'id' when given, else by 'index'."""
    todo_id = payload.get("id")
    if isinstance(todo_id, str) and todo_id:
        return "id", todo_id
    index = payload.get("index")
    if isinstance(index, int) and not isinstance(index, bool):
        return "index", index
    raise ValidationError("todo actions need an 'id' or an integer 'index'")


# ── Dispatcher ────────────────────────────────────────────────────────────────

class Dispatcher:
    def __init__(self, store: Store):
        self._store = store
        self._hooks: dict[Action, list[Hook]] = defaultdict(list)
        self._routes: dict[Action, Callable[[Payload], Payload]] = {
            Action.ADD_LIST: self._add_list,
            Action.SELECT_LIST: self._select_list,
            Action.EDIT_LIST: self._edit_list,
            Action.DELETE_LIST: self._delete_list,
            Action.ADD_TODO: self._add_todo,
            Action.EDIT_TODO: self._edit_todo,
            Action.DELETE_TODO: self._delete_todo,
            Action.TOGGLE_TODO: self._toggle_todo,
            Action.CHANGE_THEME: self._change_theme,
            Action.BACK_HOME: self._back_home,
        }

    @property
    def store(self) -> Store:
        return self._store

    def on(self, action: Action | str, hook: Hook) -> Callable[[], None]:
        """Register a post-action observer. Returns a function removing it."""
        action = Action(action)
        self._hooks[action].append(hook)

        def remove() -> None:
            if hook in self._hooks[action]:
                self._hooks[action].remove(hook)

        return remove

    def dispatch(self, action: Action | str, payload: Payload | None = None) -> bool:
        """Run one action. Returns True if the state was mutated."""
        try:
            action = Action(action)
        except ValueError:
            logger.warning("Unknown action %r dropped", action)
            return False
        payload = payload or {}
        try:
            details = self._routes[action](payload)
        except ValidationError as e:
            logger.debug("%s ignored: %s", action, e)
            return False
        except NotFound as e:
            logger.info("%s ignored: %s", action, e)
            return False
        self._fire(action, details)
        return True

    def _fire(self, action: Action, details: Payload) -> None:
        for hook in list(self._hooks.get(action, ())):
            try:
                hook(details)
            except Exception:
                logger.exception("Hook for %s failed", action)

    # ------------------------------------------------------------------ #
    # Routes                                                               #
    # ------------------------------------------------------------------ #

    def _add_list(self, payload: Payload) -> Payload:
        name = _text(payload, "name")
        list_id = self._store.add_list(name)
        if list_id is None:
            raise ValidationError("empty list name")
        return {"id": list_id, "name": name}

    def _select_list(self, payload: Payload) -> Payload:
        list_id = _list_id(payload)
        if not self._store.select_list(list_id):
            raise NotFound(f"no list {list_id!r}")
        return {"id": list_id}

    def _edit_list(self, payload: Payload) -> Payload:
        list_id = _list_id(payload)
        new_name = _text(payload, "newName")
        if not self._store.edit_list_name(list_id, new_name):
            raise NotFound(f"no list {list_id!r}")
        return {"id": list_id, "newName": new_name}

    def _delete_list(self, payload: Payload) -> Payload:
        list_id = _list_id(payload)
        if not self._store.delete_list(list_id):
            raise NotFound(f"no list {list_id!r}")
        return {"id": list_id}

    def _add_todo(self, payload: Payload) -> Payload:
        text = _text(payload, "text")
        index = self._store.add_todo(text)
        if index is None:
            raise NotFound("no list selected")
        return {"index": index, "text": text}

    def _edit_todo(self, payload: Payload) -> Payload:
        kind, ref = _todo_ref(payload)
        new_text = _text(payload, "newText")
        if not self._store.edit_todo(ref, new_text):
            raise NotFound(f"no todo with {kind} {ref!r}")
        return {kind: ref, "newText": new_text}

    def _delete_todo(self, payload: Payload) -> Payload:
        kind, ref = _todo_ref(payload)
        if not self._store.delete_todo(ref):
            raise NotFound(f"no todo with {kind} {ref!r}")
        return {kind: ref}

    def _toggle_todo(self, payload: Payload) -> Payload:
        kind, ref = _todo_ref(payload)
        completed = payload.get("completed")
        if not isinstance(completed, bool):
            raise ValidationError("'completed' must be a bool")
        if not self._store.toggle_todo(ref, completed):
            raise NotFound(f"no todo with {kind} {ref!r}")
        return {kind: ref, "completed": completed}

    def _change_theme(self, payload: Payload) -> Payload:
        theme = payload.get("theme")
        if not self._store.set_theme(theme):
            raise ValidationError(f"unknown theme {theme!r}")
        return {"theme": str(self._store.theme)}

    def _back_home(self, payload: Payload) -> Payload:
        self._store.clear_selection()
        return {}
