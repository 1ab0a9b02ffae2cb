"""Pagination footer for the vehicle table."""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

from ...services.pagination import Page


class PaginationControls(QWidget):
    """Summary text plus Previous / "Page x of y" / Next.

    Hidden entirely unless there is more than one page.
    """

    previousRequested = Signal()
    nextRequested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.status_label = QLabel("Showing 0 of 0")
        layout.addWidget(self.status_label)
        layout.addStretch(1)

        self.prev_button = QPushButton("Previous")
        layout.addWidget(self.prev_button)

        self.page_label = QLabel("Page 1 of 1")
        layout.addWidget(self.page_label)

        self.next_button = QPushButton("Next")
        layout.addWidget(self.next_button)

        self.prev_button.clicked.connect(self.previousRequested)
        self.next_button.clicked.connect(self.nextRequested)
        self.hide()

    def update_state(self, page: Page) -> None:
        self.setVisible(page.show_controls)
        self.status_label.setText(page.summary())
        self.page_label.setText(f"Page {page.current_page} of {page.total_pages}")
        self.prev_button.setEnabled(page.has_previous)
        self.next_button.setEnabled(page.has_next)
