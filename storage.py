"""Load and save app data as a JSON document held in a key-value store.

The default backend is a TOML file mapping keys to string values.
"""

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Protocol

import tomli_w

from data import AppData, Theme, Todo, TodoList, new_id
from errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".tasklists.toml"
DEFAULT_KEY = "appState"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class TomlKeyValueStore:
    """Keys and string values kept in a single TOML file."""

    def __init__(self, path: Path = DEFAULT_PATH):
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("rb") as f:
                return tomllib.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"cannot read {self.path}: {e}") from e

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            raw = self._read()
        except PersistenceError as e:
            if not isinstance(e.__cause__, ValueError):
                raise
            raw = self._set_aside()
        raw[key] = value
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("wb") as f:
                tomli_w.dump(raw, f)
            os.replace(tmp, self.path)
        except OSError as e:
            raise PersistenceError(f"cannot write {self.path}: {e}") from e

    def _set_aside(self) -> dict[str, Any]:
        """Move an unparseable file out of the way so saving can start over."""
        aside = self.path.with_name(self.path.name + ".corrupt")
        logger.warning("%s is not valid TOML, moving it to %s", self.path, aside)
        try:
            os.replace(self.path, aside)
        except OSError as e:
            raise PersistenceError(f"cannot move aside {self.path}: {e}") from e
        return {}


# ---------------------------------------------------------------------------
# JSON document <-> AppData
# ---------------------------------------------------------------------------

def to_dict(app: AppData) -> dict[str, Any]:
    return {
        "lists": [
            {
                "id": lst.id,
                "name": lst.name,
                "todos": [
                    {"id": t.id, "text": t.text, "completed": t.completed}
                    for t in lst.todos
                ],
            }
            for lst in app.lists
        ],
        "selectedListId": app.selected_list_id,
        "theme": str(app.theme),
    }


def dumps(app: AppData) -> str:
    return json.dumps(to_dict(app))


def _parse_todo(raw: Any) -> Todo | None:
    if not isinstance(raw, dict):
        return None
    text = raw.get("text")
    if not isinstance(text, str) or not text.strip():
        return None
    todo_id = raw.get("id")
    return Todo(
        text=text,
        completed=raw.get("completed") is True,
        id=todo_id if isinstance(todo_id, str) and todo_id else new_id(),
    )


def _parse_list(raw: Any) -> TodoList | None:
    if not isinstance(raw, dict):
        return None
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return None
    list_id = raw.get("id")
    todos = raw.get("todos")
    return TodoList(
        name=name,
        todos=[t for t in map(_parse_todo, todos if isinstance(todos, list) else []) if t],
        id=list_id if isinstance(list_id, str) and list_id else new_id(),
    )


def from_dict(raw: Any) -> AppData:
    """Build AppData from a decoded document, defaulting anything missing."""
    if not isinstance(raw, dict):
        return AppData()
    lists = raw.get("lists")
    app = AppData(
        lists=[lst for lst in map(_parse_list, lists if isinstance(lists, list) else []) if lst],
    )
    selected = raw.get("selectedListId")
    if selected and isinstance(selected, str) and app.find_list(selected) is not None:
        app.selected_list_id = selected
    theme = raw.get("theme")
    if isinstance(theme, str) and theme in {t.value for t in Theme}:
        app.theme = Theme(theme)
    return app


def loads(text: str | None) -> AppData:
    if not text:
        return AppData()
    try:
        raw = json.loads(text)
    except ValueError:
        logger.warning("Stored state is not valid JSON, starting empty")
        return AppData()
    return from_dict(raw)


def load(kv: KeyValueStore, key: str = DEFAULT_KEY) -> AppData:
    return loads(kv.get(key))


def save(app: AppData, kv: KeyValueStore, key: str = DEFAULT_KEY) -> None:
    kv.set(key, dumps(app))
