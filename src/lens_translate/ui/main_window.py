"""Main control window."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)


class MainWindow(QMainWindow):
    """Start/stop, language swap and a running log."""

    toggle_requested = Signal()
    swap_requested = Signal()
    clear_requested = Signal()

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Lens Translate")
        self.resize(520, 360)

        self._status_label: QLabel
        self._language_label: QLabel
        self._log_output: QTextEdit

        self._build_ui()
        self._connect_signals()
        self.update_status("Ready")

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        layout = QVBoxLayout(central_widget)

        self._status_label = QLabel(self)
        self._status_label.setAlignment(Qt.AlignLeft)
        self._language_label = QLabel(self)
        self._language_label.setAlignment(Qt.AlignLeft)

        button_layout = QHBoxLayout()
        btn_toggle = QPushButton("Start/Stop", self)
        btn_swap = QPushButton("Swap languages", self)
        btn_clear = QPushButton("Clear overlays", self)
        button_layout.addWidget(btn_toggle)
        button_layout.addWidget(btn_swap)
        button_layout.addWidget(btn_clear)

        log_output = QTextEdit(self)
        log_output.setReadOnly(True)
        log_output.setPlaceholderText("Pipeline messages appear here...")
        self._log_output = log_output

        layout.addWidget(self._status_label)
        layout.addWidget(self._language_label)
        layout.addLayout(button_layout)
        layout.addWidget(self._log_output)

        self._btn_toggle = btn_toggle
        self._btn_swap = btn_swap
        self._btn_clear = btn_clear

    def _connect_signals(self) -> None:
        self._btn_toggle.clicked.connect(self.toggle_requested.emit)
        self._btn_swap.clicked.connect(self.swap_requested.emit)
        self._btn_clear.clicked.connect(self.clear_requested.emit)

    @Slot(str)
    def update_status(self, status: str) -> None:
        self._status_label.setText(f"Status: {status}")
        self.append_log(status)

    @Slot(str, str)
    def update_languages(self, source: str, target: str) -> None:
        self._language_label.setText(f"{source} → {target}")

    @Slot(str)
    def append_log(self, message: str) -> None:
        self._log_output.append(message)
