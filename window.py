"""Main application window: rebuilds the visible page from the store on every change."""

import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLineEdit,
    QLabel, QCheckBox, QStackedWidget, QScrollArea
)
from PySide6.QtCore import Qt

import style
from data import EditKind, Theme, UiMode
from dispatcher import Action, Dispatcher
from item_widget import TodoRow
from list_widget import ListRow
from store import Store

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """View over a Store. Holds no domain data of its own.

    Exactly one page widget lives in the stack at a time; every store
    notification replaces it with a freshly built one.
    """

    def __init__(self, store: Store, dispatcher: Dispatcher):
        super().__init__()
        self._store = store
        self._dispatcher = dispatcher
        self.setWindowTitle(style.WINDOW_TITLE)
        self.resize(*style.WINDOW_SIZE)

        self._build_ui()
        self._unsubscribe = store.subscribe(self.render)
        self.render()

    # ------------------------------------------------------------------ #
    # UI construction                                                      #
    # ------------------------------------------------------------------ #

    def _build_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(style.PAGE_MARGIN, style.PAGE_MARGIN,
                                style.PAGE_MARGIN, style.PAGE_MARGIN)
        root.setSpacing(6)

        # Header
        header = QHBoxLayout()
        self.status_label = QLabel("")
        self.status_label.setObjectName("status")
        self.theme_toggle = QCheckBox("Light theme")
        self.theme_toggle.setObjectName("theme-toggle")
        self.theme_toggle.setAccessibleName("Toggle light theme")
        self.theme_toggle.clicked.connect(self._on_theme_toggled)
        header.addWidget(self.status_label)
        header.addStretch()
        header.addWidget(self.theme_toggle)
        root.addLayout(header)

        self._stack = QStackedWidget()
        root.addWidget(self._stack)

    @property
    def page(self) -> QWidget | None:
        return self._stack.currentWidget()

    def page_count(self) -> int:
        return self._stack.count()

    # ------------------------------------------------------------------ #
    # Rendering                                                            #
    # ------------------------------------------------------------------ #

    def render(self) -> None:
        mode = self._store.ui_mode
        if mode == UiMode.LOADING:
            page = self._build_loading()
        elif mode == UiMode.HOMEPAGE:
            page = self._build_homepage()
        else:
            page = self._build_list_page()
        page.setProperty("uiMode", str(mode))
        self._swap_page(page)
        self._render_chrome()

    def _swap_page(self, page: QWidget) -> None:
        # The old page may own the widget whose signal triggered this render,
        # so it is only scheduled for deletion.
        while self._stack.count():
            old = self._stack.widget(0)
            self._stack.removeWidget(old)
            old.deleteLater()
        self._stack.addWidget(page)
        self._stack.setCurrentWidget(page)

    def _render_chrome(self) -> None:
        theme = self._store.theme
        self.theme_toggle.blockSignals(True)
        self.theme_toggle.setChecked(theme == Theme.LIGHT)
        self.theme_toggle.blockSignals(False)
        self.setStyleSheet(style.stylesheet(theme))

        error = self._store.last_error
        self.status_label.setText(f"Not saved: {error}" if error else "")
        self.status_label.setVisible(error is not None)

    def _build_loading(self) -> QWidget:
        page = QWidget()
        page.setObjectName("loading")
        layout = QVBoxLayout(page)
        label = QLabel("Loading…")
        label.setObjectName("loading-label")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(label)
        return page

    def _build_homepage(self) -> QWidget:
        page = QWidget()
        page.setObjectName("homepage")
        layout = QVBoxLayout(page)
        lists = self._store.lists

        if not lists:
            empty = QLabel("No lists found. Create a new list to continue.")
            empty.setObjectName("empty-msg")
            layout.addWidget(empty)

        create = QHBoxLayout()
        name_input = QLineEdit()
        name_input.setObjectName("new-list-input")
        name_input.setPlaceholderText("Enter new list name")
        name_input.setAccessibleName("New list name")
        create_btn = QPushButton("Create New List")
        create_btn.setObjectName("new-list-btn")
        create_btn.clicked.connect(lambda: self._on_create_list(name_input))
        name_input.returnPressed.connect(lambda: self._on_create_list(name_input))
        create.addWidget(name_input)
        create.addWidget(create_btn)
        layout.addLayout(create)

        if lists:
            title = QLabel("Your Lists")
            title.setObjectName("lists-title")
            layout.addWidget(title)
            rows = QVBoxLayout()
            for lst in lists:
                row = ListRow(lst.name, len(lst.todos),
                              editing=lst.id == self._store.editing_list_id)
                row.select_requested.connect(
                    lambda list_id=lst.id: self._dispatcher.dispatch(
                        Action.SELECT_LIST, {"id": list_id}))
                row.edit_requested.connect(
                    lambda list_id=lst.id: self._store.begin_editing(EditKind.LIST, list_id))
                row.delete_requested.connect(
                    lambda list_id=lst.id: self._dispatcher.dispatch(
                        Action.DELETE_LIST, {"id": list_id}))
                row.save_requested.connect(
                    lambda text, list_id=lst.id: self._on_save_list(list_id, text))
                rows.addWidget(row)
            layout.addWidget(self._scrolling(rows, "list-selector"))
        layout.addStretch()
        return page

    def _build_list_page(self) -> QWidget:
        page = QWidget()
        page.setObjectName("list-page")
        layout = QVBoxLayout(page)
        lst = self._store.selected_list

        back = QPushButton("← Back to Lists")
        back.setObjectName("back-home-btn")
        back.clicked.connect(lambda: self._dispatcher.dispatch(Action.BACK_HOME))
        layout.addWidget(back, alignment=Qt.AlignmentFlag.AlignLeft)

        title = QLabel(lst.name)
        title.setObjectName("list-title")
        layout.addWidget(title)

        form = QHBoxLayout()
        todo_input = QLineEdit()
        todo_input.setObjectName("todo-input")
        todo_input.setPlaceholderText("Add a task")
        todo_input.setAccessibleName("New task")
        add_btn = QPushButton("Add")
        add_btn.setObjectName("add-todo-btn")
        add_btn.clicked.connect(lambda: self._on_add_todo(todo_input))
        todo_input.returnPressed.connect(lambda: self._on_add_todo(todo_input))
        form.addWidget(todo_input)
        form.addWidget(add_btn)
        layout.addLayout(form)

        rows = QVBoxLayout()
        for todo in lst.todos:
            row = TodoRow(todo.text, todo.completed,
                          editing=todo.id == self._store.editing_todo_id)
            row.toggled.connect(
                lambda checked, todo_id=todo.id: self._dispatcher.dispatch(
                    Action.TOGGLE_TODO, {"id": todo_id, "completed": checked}))
            row.edit_requested.connect(
                lambda todo_id=todo.id: self._store.begin_editing(EditKind.TODO, todo_id))
            row.delete_requested.connect(
                lambda todo_id=todo.id: self._dispatcher.dispatch(
                    Action.DELETE_TODO, {"id": todo_id}))
            row.save_requested.connect(
                lambda text, todo_id=todo.id: self._on_save_todo(todo_id, text))
            rows.addWidget(row)
        layout.addWidget(self._scrolling(rows, "todo-list"))
        return page

    def _scrolling(self, rows: QVBoxLayout, name: str) -> QScrollArea:
        rows.addStretch()
        body = QWidget()
        body.setObjectName(name)
        body.setLayout(rows)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)
        scroll.setWidget(body)
        return scroll

    # ------------------------------------------------------------------ #
    # Event handlers                                                       #
    # ------------------------------------------------------------------ #

    def _on_create_list(self, name_input: QLineEdit) -> None:
        name = name_input.text().strip()
        if name:
            self._dispatcher.dispatch(Action.ADD_LIST, {"name": name})

    def _on_add_todo(self, todo_input: QLineEdit) -> None:
        text = todo_input.text().strip()
        if text:
            self._dispatcher.dispatch(Action.ADD_TODO, {"text": text})

    def _on_save_list(self, list_id: str, text: str) -> None:
        name = text.strip()
        if name:
            self._dispatcher.dispatch(Action.EDIT_LIST, {"id": list_id, "newName": name})
        else:
            self._store.cancel_editing(EditKind.LIST)

    def _on_save_todo(self, todo_id: str, text: str) -> None:
        text = text.strip()
        if text:
            self._dispatcher.dispatch(Action.EDIT_TODO, {"id": todo_id, "newText": text})
        else:
            self._store.cancel_editing(EditKind.TODO)

    def _on_theme_toggled(self, checked: bool) -> None:
        theme = Theme.LIGHT if checked else Theme.DARK
        self._dispatcher.dispatch(Action.CHANGE_THEME, {"theme": theme})

    def closeEvent(self, event):
        self._unsubscribe()
        event.accept()
