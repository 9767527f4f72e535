"""Row widgets that swap between a static view and an inline editor.

TodoRow shows a single todo: [checkbox | text | Edit | Delete], or
[line edit | Save] while it is being edited.
"""

from PySide6.QtWidgets import (
    QCheckBox, QFrame, QHBoxLayout, QLabel, QLineEdit, QPushButton, QSizePolicy
)
from PySide6.QtCore import Signal

import style


class EditableRow(QFrame):
    """Base row. Subclasses fill the static layout; edit mode is shared."""
    edit_requested = Signal()
    delete_requested = Signal()
    save_requested = Signal(str)   # raw editor text, not yet trimmed

    def __init__(self, text: str, parent=None):
        super().__init__(parent)
        self._text = text
        self.editor: QLineEdit | None = None

        self._layout = QHBoxLayout(self)
        self._layout.setContentsMargins(6, 4, 6, 4)
        self._layout.setSpacing(style.ROW_SPACING)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)

    def _populate(self, editing: bool) -> None:
        if editing:
            self._build_editor()
        else:
            self._build_static()

    @property
    def editing(self) -> bool:
        return self.editor is not None

    def text(self) -> str:
        return self._text

    def _build_static(self) -> None:
        raise NotImplementedError

    def _build_editor(self) -> None:
        self.editor = QLineEdit(self._text, self)
        self.editor.setObjectName("edit-input")
        self.editor.setAccessibleName("Edit text")
        self.editor.returnPressed.connect(self._on_save)
        save = self._button("Save", "save-button")
        save.clicked.connect(self._on_save)
        self._layout.addWidget(self.editor)
        self._layout.addWidget(save)
        self.editor.selectAll()
        self.editor.setFocus()

    def _button(self, label: str, name: str) -> QPushButton:
        btn = QPushButton(label, self)
        btn.setObjectName(name)
        btn.setAccessibleName(f"{label} {self._text}")
        btn.setFixedWidth(style.ROW_BUTTON_WIDTH)
        return btn

    def _add_action_buttons(self) -> None:
        edit = self._button("Edit", "edit-button")
        edit.clicked.connect(lambda: self.edit_requested.emit())
        delete = self._button("Delete", "delete-button")
        delete.clicked.connect(lambda: self.delete_requested.emit())
        self._layout.addWidget(edit)
        self._layout.addWidget(delete)

    def _on_save(self) -> None:
        self.save_requested.emit(self.editor.text())


class TodoRow(EditableRow):
    toggled = Signal(bool)

    def __init__(self, text: str, completed: bool, editing: bool = False, parent=None):
        super().__init__(text, parent)
        self.setObjectName("todo")
        self._completed = completed
        self.checkbox: QCheckBox | None = None
        self._populate(editing)

    def _build_static(self) -> None:
        self.checkbox = QCheckBox(self)
        self.checkbox.setObjectName("todo-checkbox")
        self.checkbox.setAccessibleName(f"Mark {self._text} as done")
        self.checkbox.setChecked(self._completed)
        self.checkbox.clicked.connect(lambda checked: self.toggled.emit(checked))

        label = QLabel(self._text, self)
        label.setObjectName("todo-text")
        label.setWordWrap(True)
        label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        if self._completed:
            font = label.font()
            font.setStrikeOut(True)
            label.setFont(font)

        self._layout.addWidget(self.checkbox)
        self._layout.addWidget(label)
        self._add_action_buttons()
