"""State store: owns AppData, persists every mutation, notifies subscribers.

Mutations are no-ops (falsy return) when their input is empty or references
a list/todo that no longer exists. A successful mutation writes the full
snapshot to the key-value backend and then calls every listener in
registration order. Edit mode is view state: it notifies but never persists.
"""

import logging
from collections.abc import Callable

import storage
from data import AppData, EditKind, Theme, Todo, TodoList, UiMode
from errors import PersistenceError
from storage import KeyValueStore

logger = logging.getLogger(__name__)

Listener = Callable[[], None]
TodoRef = int | str  # position in the selected list, or a stable todo id


class Store:
    def __init__(self, kv: KeyValueStore, key: str = storage.DEFAULT_KEY,
                 data: AppData | None = None, loading: bool = False):
        self._kv = kv
        self._key = key
        self._data = data if data is not None else AppData()
        self._listeners: list[Listener] = []
        self._loading = loading
        self.editing_list_id: str | None = None
        self.editing_todo_id: str | None = None
        self.last_error: PersistenceError | None = None

    @classmethod
    def open(cls, kv: KeyValueStore, key: str = storage.DEFAULT_KEY,
             loading: bool = False) -> "Store":
        """Rehydrate from the backend; an unreadable backend yields an empty state."""
        error = None
        try:
            data = storage.load(kv, key)
        except PersistenceError as e:
            logger.warning("Could not load saved state: %s", e)
            data, error = AppData(), e
        store = cls(kv, key, data, loading=loading)
        store.last_error = error
        return store

    # ------------------------------------------------------------------ #
    # Read access                                                          #
    # ------------------------------------------------------------------ #

    @property
    def data(self) -> AppData:
        return self._data

    @property
    def lists(self) -> list[TodoList]:
        return self._data.lists

    @property
    def selected_list_id(self) -> str | None:
        return self._data.selected_list_id

    @property
    def selected_list(self) -> TodoList | None:
        return self._data.selected_list()

    @property
    def theme(self) -> Theme:
        return self._data.theme

    @property
    def ui_mode(self) -> UiMode:
        if self._loading:
            return UiMode.LOADING
        if self.selected_list is None:
            return UiMode.HOMEPAGE
        return UiMode.LIST

    # ------------------------------------------------------------------ #
    # Subscription                                                         #
    # ------------------------------------------------------------------ #

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _commit(self) -> None:
        """Persist the full snapshot, then notify."""
        try:
            storage.save(self._data, self._kv, self._key)
        except PersistenceError as e:
            logger.warning("State kept in memory only, save failed: %s", e)
            self.last_error = e
        else:
            self.last_error = None
        self.notify()

    # ------------------------------------------------------------------ #
    # Lists                                                                #
    # ------------------------------------------------------------------ #

    def add_list(self, name: str) -> str | None:
        name = (name or "").strip()
        if not name:
            return None
        lst = self._data.add_list(name)
        self._select(lst.id)
        logger.debug("Added list %s (%r)", lst.id, name)
        self._commit()
        return lst.id

    def select_list(self, list_id: str) -> bool:
        if self._data.find_list(list_id) is None:
            return False
        self._select(list_id)
        self._commit()
        return True

    def clear_selection(self) -> bool:
        self._select(None)
        self._commit()
        return True

    def edit_list_name(self, list_id: str, new_name: str) -> bool:
        lst = self._data.find_list(list_id)
        if lst is None:
            return False
        new_name = (new_name or "").strip()
        if not new_name:
            self.cancel_editing(EditKind.LIST)
            return False
        lst.name = new_name
        if self.editing_list_id == list_id:
            self.editing_list_id = None
        self._commit()
        return True

    def delete_list(self, list_id: str) -> bool:
        if self._data.remove_list(list_id) is None:
            return False
        if self._data.selected_list_id == list_id:
            self._select(None)
        if self.editing_list_id == list_id:
            self.editing_list_id = None
        logger.debug("Deleted list %s", list_id)
        self._commit()
        return True

    def _select(self, list_id: str | None) -> None:
        if self._data.selected_list_id != list_id:
            self.editing_list_id = None
            self.editing_todo_id = None
        self._data.selected_list_id = list_id

    # ------------------------------------------------------------------ #
    # Todos in the selected list                                          #
    # ------------------------------------------------------------------ #

    def _resolve(self, ref: TodoRef) -> tuple[TodoList, int] | None:
        lst = self.selected_list
        if lst is None:
            return None
        if isinstance(ref, str):
            index = lst.index_of(ref)
            return None if index is None else (lst, index)
        if isinstance(ref, bool) or not isinstance(ref, int):
            return None
        if 0 <= ref < len(lst.todos):
            return lst, ref
        return None

    def add_todo(self, text: str) -> int | None:
        lst = self.selected_list
        text = (text or "").strip()
        if lst is None or not text:
            return None
        lst.todos.append(Todo(text=text))
        self._commit()
        return len(lst.todos) - 1

    def delete_todo(self, ref: TodoRef) -> bool:
        found = self._resolve(ref)
        if found is None:
            return False
        lst, index = found
        todo = lst.todos.pop(index)
        if self.editing_todo_id == todo.id:
            self.editing_todo_id = None
        self._commit()
        return True

    def edit_todo(self, ref: TodoRef, new_text: str) -> bool:
        found = self._resolve(ref)
        if found is None:
            return False
        lst, index = found
        new_text = (new_text or "").strip()
        if not new_text:
            self.cancel_editing(EditKind.TODO)
            return False
        todo = lst.todos[index]
        todo.text = new_text
        if self.editing_todo_id == todo.id:
            self.editing_todo_id = None
        self._commit()
        return True

    def toggle_todo(self, ref: TodoRef, completed: bool) -> bool:
        found = self._resolve(ref)
        if found is None:
            return False
        lst, index = found
        lst.todos[index].completed = bool(completed)
        self._commit()
        return True

    # ------------------------------------------------------------------ #
    # Theme, edit mode, startup                                           #
    # ------------------------------------------------------------------ #

    def set_theme(self, theme: Theme | str) -> bool:
        try:
            self._data.theme = Theme(theme)
        except ValueError:
            return False
        self._commit()
        return True

    def begin_editing(self, kind: EditKind, item_id: str) -> bool:
        """Put one list (or one todo of the selected list) in edit mode,
        taking any other item of the same kind out of it."""
        if kind == EditKind.LIST:
            if self._data.find_list(item_id) is None:
                return False
            self.editing_list_id = item_id
        else:
            lst = self.selected_list
            if lst is None or lst.index_of(item_id) is None:
                return False
            self.editing_todo_id = item_id
        self.notify()
        return True

    def cancel_editing(self, kind: EditKind) -> bool:
        if kind == EditKind.LIST:
            was, self.editing_list_id = self.editing_list_id, None
        else:
            was, self.editing_todo_id = self.editing_todo_id, None
        if was is None:
            return False
        self.notify()
        return True

    def finish_loading(self) -> None:
        if not self._loading:
            return
        self._loading = False
        self.notify()
