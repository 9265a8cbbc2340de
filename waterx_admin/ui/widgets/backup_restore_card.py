"""
Backup & Restore card
Export button, backup file chooser and the guarded restore action
"""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFrame, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QLineEdit,
    QFileDialog, QMessageBox
)

from waterx_admin.config import BACKUP_FILE_FILTER
from waterx_admin.models import RestoreState
from waterx_admin.utils.file_reader import FileReadWorker
from waterx_admin.utils.workers import TaskWorker


class Card(QFrame):
    """Titled panel used by the settings page"""

    def __init__(self, title: str, description: str = "", parent=None):
        super().__init__(parent)
        self.setObjectName("card")
        self.body = QVBoxLayout(self)
        self.body.setContentsMargins(20, 18, 20, 18)
        self.body.setSpacing(12)

        title_label = QLabel(title)
        title_label.setObjectName("cardTitle")
        self.body.addWidget(title_label)
        if description:
            desc = QLabel(description)
            desc.setObjectName("cardDescription")
            desc.setWordWrap(True)
            self.body.addWidget(desc)


class BackupRestoreCard(Card):
    def __init__(self, controller, parent=None):
        super().__init__(
            "Backup & Restore",
            "Export all your application data or restore it from a backup file.",
            parent,
        )
        self.controller = controller

        # Export
        export_title = QLabel("<b>Export Data</b>")
        export_text = QLabel(
            "Download a JSON file containing all customers, products, orders, "
            "transactions, and employees (excluding the admin account)."
        )
        export_text.setObjectName("cardDescription")
        export_text.setWordWrap(True)
        self.export_btn = QPushButton("⬇  Export Backup")
        self.export_btn.clicked.connect(self._on_export_clicked)
        self.body.addWidget(export_title)
        self.body.addWidget(export_text)
        self.body.addWidget(self.export_btn, alignment=Qt.AlignLeft)

        divider = QFrame()
        divider.setFrameShape(QFrame.HLine)
        self.body.addWidget(divider)

        # Restore
        restore_title = QLabel("<b>Restore Data</b>")
        restore_text = QLabel("Upload a backup file to restore the application state.")
        restore_text.setObjectName("cardDescription")
        warning = QLabel("Warning: This will overwrite all existing data.")
        warning.setObjectName("destructive")
        self.body.addWidget(restore_title)
        self.body.addWidget(restore_text)
        self.body.addWidget(warning)

        row = QHBoxLayout()
        self.file_edit = QLineEdit()
        self.file_edit.setReadOnly(True)
        self.file_edit.setPlaceholderText("No file chosen")
        self.browse_btn = QPushButton("Choose file…")
        self.browse_btn.clicked.connect(self._on_browse_clicked)
        self.restore_btn = QPushButton("⬆  Restore from File")
        self.restore_btn.setStyleSheet("QPushButton { background: #dc2626; color: white; padding: 6px 12px; border-radius: 6px; }"
                                       "QPushButton:disabled { background: #7f1d1d; color: #fca5a5; }")
        self.restore_btn.clicked.connect(self.controller.request_restore)
        row.addWidget(self.file_edit, 1)
        row.addWidget(self.browse_btn)
        row.addWidget(self.restore_btn)
        self.body.addLayout(row)

        self.controller.state_changed.connect(self._refresh)
        self.controller.confirm_requested.connect(self._confirm)
        self._refresh(self.controller.state)

    def _refresh(self, state):
        exporting = state is RestoreState.EXPORTING
        restoring = state in (RestoreState.RESTORING, RestoreState.RELOADING)
        self.export_btn.setEnabled(not exporting)
        self.export_btn.setText("Exporting..." if exporting else "⬇  Export Backup")
        self.restore_btn.setEnabled(not restoring and self.controller.selected_file is not None)
        self.restore_btn.setText("Restoring..." if restoring else "⬆  Restore from File")
        self.browse_btn.setEnabled(not restoring and not exporting)
        selected = self.controller.selected_file
        self.file_edit.setText(selected.name if selected else "")

    def _on_export_clicked(self):
        folder = QFileDialog.getExistingDirectory(self, "Choose Backup Folder")
        if not folder:
            return
        # Blocks a second click before the worker's state change arrives
        self.export_btn.setEnabled(False)
        self._run(TaskWorker(self.controller.export_backup, folder, parent=self))

    def _on_browse_clicked(self):
        path, _ = QFileDialog.getOpenFileName(self, "Select Backup File", "", BACKUP_FILE_FILTER)
        if path:
            self.controller.select_file(path)

    def _confirm(self, file_name: str):
        box = QMessageBox(self)
        box.setIcon(QMessageBox.Warning)
        box.setWindowTitle("Are you absolutely sure?")
        box.setText("Are you absolutely sure?")
        box.setInformativeText(
            "This action is irreversible. It will permanently delete all current data "
            "(except your admin account) and replace it with the data from the backup "
            f"file: <b>{file_name}</b>."
        )
        confirm_btn = box.addButton("Yes, restore data", QMessageBox.DestructiveRole)
        box.addButton("Cancel", QMessageBox.RejectRole)
        box.exec()

        if box.clickedButton() is not confirm_btn:
            self.controller.cancel_restore()
            return

        path = self.controller.begin_restore()
        if path is None:
            return
        reader = FileReadWorker(path, parent=self)
        reader.finished_reading.connect(self._on_file_read)
        self._run(reader)

    def _on_file_read(self, result):
        self._run(TaskWorker(self.controller.finish_restore, result, parent=self))

    def _sync(self):
        self._refresh(self.controller.state)

    def _wire(self, worker):
        """Route a background failure back into the controller and resync the buttons"""
        if isinstance(worker, TaskWorker):
            worker.failed.connect(self.controller.task_failed)
        worker.finished.connect(self._sync)
        worker.finished.connect(worker.deleteLater)
        return worker

    def _run(self, worker):
        self._wire(worker).start()
