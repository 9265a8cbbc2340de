"""
Sidebar navigation
Logo and app name, role-filtered links, signed-in user and logout
"""

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QFrame, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QButtonGroup

from waterx_admin.config import APP_NAME, NAV_LOGO_HEIGHT, SIDEBAR_WIDTH, visible_links
from waterx_admin.ui.widgets import LogoLabel


class AppNav(QFrame):
    navigate = Signal(str)  # href

    def __init__(self, auth, settings_store, parent=None):
        super().__init__(parent)
        self.setObjectName("sidebar")
        self.setFixedWidth(SIDEBAR_WIDTH)
        self.auth = auth
        self.settings = settings_store
        self._buttons = {}

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 16, 12, 16)

        header = QHBoxLayout()
        self.logo = LogoLabel(NAV_LOGO_HEIGHT)
        title = QLabel(f"<b>{APP_NAME.upper()}</b>")
        title.setStyleSheet("font-size: 18px; letter-spacing: 2px;")
        header.addWidget(self.logo)
        header.addWidget(title)
        header.addStretch()
        layout.addLayout(header)
        layout.addSpacing(16)

        self.links_layout = QVBoxLayout()
        self.links_layout.setSpacing(4)
        layout.addLayout(self.links_layout)
        layout.addStretch()

        self.user_name = QLabel()
        self.user_name.setStyleSheet("font-weight: 600;")
        self.user_role = QLabel()
        self.user_role.setObjectName("cardDescription")
        layout.addWidget(self.user_name)
        layout.addWidget(self.user_role)
        logout_btn = QPushButton("⎋  Logout")
        logout_btn.setObjectName("navButton")
        logout_btn.clicked.connect(self.auth.logout)
        layout.addWidget(logout_btn)

        self._group = QButtonGroup(self)
        self._group.setExclusive(True)

        self.settings.logo_url_changed.connect(self.logo.set_url)
        self.auth.changed.connect(self._on_user_changed)
        self._on_user_changed(self.auth.user)

    def _on_user_changed(self, user):
        self.user_name.setText(user.name if user else "")
        self.user_role.setText(user.role if user else "")
        self._rebuild_links(user.role if user else None)

    def _rebuild_links(self, role):
        current = self.current_href()
        for btn in self._buttons.values():
            self._group.removeButton(btn)
            btn.deleteLater()
        self._buttons = {}
        for link in visible_links(role):
            btn = QPushButton(f"{link['icon']}  {link['label']}")
            btn.setObjectName("navButton")
            btn.setCheckable(True)
            btn.clicked.connect(lambda _checked=False, href=link["href"]: self.navigate.emit(href))
            self._group.addButton(btn)
            self.links_layout.addWidget(btn)
            self._buttons[link["href"]] = btn
        if current in self._buttons:
            self.set_active(current)

    def links(self):
        return list(self._buttons)

    def current_href(self):
        for href, btn in self._buttons.items():
            if btn.isChecked():
                return href
        return None

    def set_active(self, href: str):
        for link_href, btn in self._buttons.items():
            btn.setChecked(href.startswith(link_href))
