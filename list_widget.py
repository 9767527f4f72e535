"""Homepage row for one list: [name | Edit | Delete], or an inline rename editor."""

from PySide6.QtWidgets import QPushButton, QSizePolicy
from PySide6.QtCore import Signal

from item_widget import EditableRow


class ListRow(EditableRow):
    select_requested = Signal()

    def __init__(self, name: str, todo_count: int = 0, editing: bool = False, parent=None):
        super().__init__(name, parent)
        self.setObjectName("list-item")
        self._todo_count = todo_count
        self._populate(editing)

    def _build_static(self) -> None:
        # Only the name is clickable, so Edit/Delete never select the list.
        name = QPushButton(self._text, self)
        name.setObjectName("list-name")
        name.setFlat(True)
        name.setAccessibleName(f"Open list {self._text}")
        name.setToolTip(f"{self._todo_count} item(s)")
        name.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        name.setStyleSheet("QPushButton { text-align: left; border: none; }")
        name.clicked.connect(lambda: self.select_requested.emit())

        self._layout.addWidget(name)
        self._add_action_buttons()
