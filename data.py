"""In-memory data model for the task-list app."""

import uuid
from dataclasses import dataclass, field
from enum import StrEnum


def new_id() -> str:
    return uuid.uuid4().hex


class Theme(StrEnum):
    DARK = "dark"
    LIGHT = "light"


class UiMode(StrEnum):
    LOADING = "loading"
    HOMEPAGE = "homepage"
    LIST = "list"


class EditKind(StrEnum):
    LIST = "list"
    TODO = "todo"


@dataclass
class Todo:
    text: str
    completed: bool = False
    id: str = field(default_factory=new_id)


@dataclass
class TodoList:
    name: str
    todos: list[Todo] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def index_of(self, todo_id: str) -> int | None:
        for i, todo in enumerate(self.todos):
            if todo.id == todo_id:
                return i
        return None


@dataclass
class AppData:
    lists: list[TodoList] = field(default_factory=list)
    selected_list_id: str | None = None
    theme: Theme = Theme.DARK

    def find_list(self, list_id: str | None) -> TodoList | None:
        if list_id is None:
            return None
        for lst in self.lists:
            if lst.id == list_id:
                return lst
        return None

    def selected_list(self) -> TodoList | None:
        """The selected list, or None if nothing (or a deleted list) is selected."""
        return self.find_list(self.selected_list_id)

    def add_list(self, name: str) -> TodoList:
        lst = TodoList(name=name)
        self.lists.append(lst)
        return lst

    def remove_list(self, list_id: str) -> TodoList | None:
        lst = self.find_list(list_id)
        if lst is not None:
            self.lists.remove(lst)
        return lst
