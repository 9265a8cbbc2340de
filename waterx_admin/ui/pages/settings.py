"""
Settings Page
Profile information, branding and backup/restore for the administrator
"""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QLineEdit,
    QPushButton, QScrollArea
)

from waterx_admin.config import LOGO_PREVIEW_HEIGHT
from waterx_admin.controllers.settings_page import validate_profile, validate_branding
from waterx_admin.models import ProfileFormValues, BrandingFormValues
from waterx_admin.ui.widgets import Card, LogoLabel, BackupRestoreCard
from waterx_admin.utils.workers import TaskWorker


class _Field(QWidget):
    """Label, line edit and inline error message"""

    def __init__(self, label: str, placeholder: str = "", password: bool = False, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)
        layout.addWidget(QLabel(label))
        self.edit = QLineEdit()
        self.edit.setPlaceholderText(placeholder)
        if password:
            self.edit.setEchoMode(QLineEdit.Password)
        layout.addWidget(self.edit)
        self.error = QLabel()
        self.error.setObjectName("fieldError")
        self.error.hide()
        layout.addWidget(self.error)

    def text(self) -> str:
        return self.edit.text()

    def set_text(self, value: str):
        self.edit.setText(value or "")

    def set_error(self, message: str):
        self.error.setText(message or "")
        self.error.setVisible(bool(message))


class SettingsPage(QWidget):
    def __init__(self, controller, settings_store, backup_controller, parent=None):
        super().__init__(parent)
        self.setObjectName("page")
        self.controller = controller
        self.settings = settings_store
        self._loaded = False

        outer = QVBoxLayout(self)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.NoFrame)
        outer.addWidget(scroll)

        content = QWidget()
        content.setObjectName("page")
        scroll.setWidget(content)
        layout = QVBoxLayout(content)
        layout.setContentsMargins(32, 32, 32, 32)
        layout.addWidget(QLabel("<h1>⚙️ Admin Settings</h1>"))

        grid = QGridLayout()
        grid.setSpacing(24)
        layout.addLayout(grid)
        left = QVBoxLayout()
        left.setSpacing(24)
        left.addWidget(self._build_profile_card())
        left.addWidget(self._build_branding_card())
        left.addStretch()
        grid.addLayout(left, 0, 0)
        grid.addWidget(BackupRestoreCard(backup_controller), 0, 1, Qt.AlignTop)

        self.controller.profile_reset.connect(self._reset_profile)
        self.controller.branding_reset.connect(self._reset_branding)
        self.settings.state_changed.connect(self._on_settings_state)
        self.settings.logo_url_changed.connect(self.preview.set_url)
        self.preview.set_url(self.settings.logo_url)
        self._on_settings_state(self.settings.state)

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------
    def _build_profile_card(self):
        card = Card("Profile Information", "Update your account details here.")
        self.name_field = _Field("Full Name", "Your Name")
        self.email_field = _Field("Email Address", "your.email@example.com")
        self.password_field = _Field("New Password", "Leave blank to keep current", password=True)
        for field in (self.name_field, self.email_field, self.password_field):
            card.body.addWidget(field)
        self.profile_btn = QPushButton("Save Changes")
        self.profile_btn.clicked.connect(self._submit_profile)
        row = QHBoxLayout()
        row.addStretch()
        row.addWidget(self.profile_btn)
        card.body.addLayout(row)
        return card

    def _build_branding_card(self):
        card = Card("Branding", "Set your company logo by providing a URL.")
        self.logo_field = _Field("Logo URL", "https://example.com/logo.png")
        card.body.addWidget(self.logo_field)
        self.preview_title = QLabel("Current Logo Preview")
        self.preview = LogoLabel(LOGO_PREVIEW_HEIGHT)
        card.body.addWidget(self.preview_title)
        card.body.addWidget(self.preview)
        self.branding_btn = QPushButton("Save Logo")
        self.branding_btn.clicked.connect(self._submit_branding)
        row = QHBoxLayout()
        row.addStretch()
        row.addWidget(self.branding_btn)
        card.body.addLayout(row)
        return card

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def showEvent(self, event):
        super().showEvent(event)
        if not self._loaded:
            self._loaded = True
            self._run(TaskWorker(self.controller.load, parent=self))

    def _wire(self, worker, on_finished=None):
        worker.failed.connect(self.controller.task_failed)
        if on_finished is not None:
            worker.finished.connect(on_finished)
        worker.finished.connect(worker.deleteLater)
        return worker

    def _run(self, worker, on_finished=None):
        self._wire(worker, on_finished).start()

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------
    def _profile_values(self) -> ProfileFormValues:
        return ProfileFormValues(
            name=self.name_field.text(),
            email=self.email_field.text(),
            password=self.password_field.text(),
        )

    def _submit_profile(self):
        values = self._profile_values()
        errors = validate_profile(values)
        self.name_field.set_error(errors.get("name"))
        self.email_field.set_error(errors.get("email"))
        self.password_field.set_error(errors.get("password"))
        if errors:
            return
        self.profile_btn.setEnabled(False)
        self.profile_btn.setText("Saving...")
        self._run(TaskWorker(self.controller.submit_profile, values, parent=self), self._profile_done)

    def _profile_done(self):
        self.profile_btn.setEnabled(True)
        self.profile_btn.setText("Save Changes")

    def _reset_profile(self, values):
        self.name_field.set_text(values.name)
        self.email_field.set_text(values.email)
        self.password_field.set_text(values.password)

    # ------------------------------------------------------------------
    # Branding
    # ------------------------------------------------------------------
    def _submit_branding(self):
        values = BrandingFormValues(logo_url=self.logo_field.text())
        errors = validate_branding(values)
        self.logo_field.set_error(errors.get("logo_url"))
        if errors:
            return
        self._run(TaskWorker(self.controller.submit_branding, values, parent=self))

    def _reset_branding(self, values):
        self.logo_field.set_text(values.logo_url)

    def _on_settings_state(self, state):
        self.branding_btn.setEnabled(not state.is_loading)
        self.branding_btn.setText("Saving..." if state.is_loading else "Save Logo")
        self.preview_title.setVisible(bool(state.logo_url))
