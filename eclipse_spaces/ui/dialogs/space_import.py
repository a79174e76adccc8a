from __future__ import annotations

from typing import Optional, Sequence

from PySide6 import QtWidgets

from eclipse_spaces.errors import SpaceImportError
from eclipse_spaces.i18n import tr
from eclipse_spaces.models import ImportPayload, Space, SpaceImportPreview
from eclipse_spaces.preview import build_space_import_preview, format_space_import_preview_message
from eclipse_spaces.services.transfer_service import SpaceTransferService


class SpaceImportPreviewDialog(QtWidgets.QDialog):
    """Confirmation dialog shown before an import is committed."""

    def __init__(
        self,
        parent: Optional[QtWidgets.QWidget],
        payload: ImportPayload,
        existing_spaces: Sequence[Space],
        *,
        lang: str = "en",
        max_items: Optional[int] = None,
    ) -> None:
        super().__init__(parent)
        self.payload = payload
        self.existing_spaces = list(existing_spaces)
        self.lang = lang
        self.max_items = max_items
        self._selected: Optional[ImportPayload] = payload
        self._preview: Optional[SpaceImportPreview] = None

        self.setWindowTitle(tr("dialog.title", lang))
        self.setModal(True)
        self.setMinimumSize(480, 360)

        title = QtWidgets.QLabel(tr("dialog.title", lang))
        title.setObjectName("TitleLabel")

        self.selection_label = QtWidgets.QLabel(tr("dialog.selection", lang))
        self.selection_edit = QtWidgets.QLineEdit()
        count = len(payload.spaces())
        self.selection_edit.setText(f"1-{count}" if count > 1 else "1")
        self.selection_label.setVisible(payload.is_multi)
        self.selection_edit.setVisible(payload.is_multi)

        self.preview_view = QtWidgets.QPlainTextEdit()
        self.preview_view.setReadOnly(True)

        self.error_label = QtWidgets.QLabel("")
        self.error_label.setObjectName("ErrorLabel")
        self.error_label.setWordWrap(True)
        self.error_label.setVisible(False)

        self.btn_import = QtWidgets.QPushButton(tr("dialog.import", lang))
        self.btn_import.setProperty("primary", True)
        btn_cancel = QtWidgets.QPushButton(tr("dialog.cancel", lang))
        self.btn_import.clicked.connect(self.accept)
        btn_cancel.clicked.connect(self.reject)
        btn_row = QtWidgets.QHBoxLayout()
        btn_row.setSpacing(10)
        btn_row.addStretch(1)
        btn_row.addWidget(btn_cancel)
        btn_row.addWidget(self.btn_import)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setSpacing(12)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.addWidget(title)
        layout.addWidget(self.selection_label)
        layout.addWidget(self.selection_edit)
        layout.addWidget(self.preview_view, 1)
        layout.addWidget(self.error_label)
        layout.addLayout(btn_row)

        self.selection_edit.textChanged.connect(self._refresh)
        self._refresh()

    def _refresh(self) -> None:
        try:
            selected = SpaceTransferService.select_spaces(self.payload, self.selection_edit.text())
        except SpaceImportError as exc:
            self._selected = None
            self._preview = None
            self.preview_view.clear()
            self.error_label.setText(str(exc))
            self.error_label.setVisible(True)
            self.btn_import.setEnabled(False)
            return

        self._selected = selected
        self._preview = build_space_import_preview(selected, self.existing_spaces)
        self.preview_view.setPlainText(
            format_space_import_preview_message(self._preview, self.lang, self.max_items)
        )
        self.error_label.clear()
        self.error_label.setVisible(False)
        self.btn_import.setEnabled(True)

    def preview(self) -> Optional[SpaceImportPreview]:
        return self._preview

    def selected_payload(self) -> Optional[ImportPayload]:
        return self._selected
