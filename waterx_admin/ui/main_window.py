"""
Main Window
Application shell with sidebar navigation and page stack
"""

import logging
import subprocess
import sys

from PySide6.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QStackedWidget, QApplication

from waterx_admin.config import APP_TITLE, NAV_LINKS
from waterx_admin.ui.app_nav import AppNav
from waterx_admin.ui.modern_ui_helper import connect_notifications
from waterx_admin.ui.pages import SettingsPage, PlaceholderPage
from waterx_admin.utils.workers import TaskWorker

SETTINGS_HREF = "/settings"


class MainWindow(QMainWindow):
    def __init__(self, auth, settings_store, page_controller, backup_controller, restart=None):
        super().__init__()
        self.auth = auth
        self.settings = settings_store
        self.restart = restart or _restart_application
        user = auth.user
        self.setWindowTitle(f"{APP_TITLE} — {user.name}" if user else APP_TITLE)
        self.resize(1280, 820)

        central = QWidget()
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self.setCentralWidget(central)

        self.nav = AppNav(auth, settings_store)
        self.stack = QStackedWidget()
        layout.addWidget(self.nav)
        layout.addWidget(self.stack, 1)

        self.pages = {}
        for link in NAV_LINKS:
            if link["href"] == SETTINGS_HREF:
                page = SettingsPage(page_controller, settings_store, backup_controller)
            else:
                page = PlaceholderPage(link["label"])
            self.pages[link["href"]] = page
            self.stack.addWidget(page)

        # Toast bridges live as long as the window
        self._bridges = [
            connect_notifications(source, self)
            for source in (settings_store, page_controller, page_controller.employees, backup_controller)
        ]

        self.nav.navigate.connect(self.show_page)
        self.auth.changed.connect(self._on_user_changed)
        backup_controller.reload_requested.connect(self._reload)

        links = self.nav.links()
        self.show_page(SETTINGS_HREF if SETTINGS_HREF in links else (links[0] if links else SETTINGS_HREF))

        worker = TaskWorker(settings_store.fetch_logo_url, parent=self)
        worker.finished.connect(worker.deleteLater)
        worker.start()

    def show_page(self, href: str):
        page = self.pages.get(href)
        if page is None:
            logging.warning(f"No page registered for {href}")
            return
        self.stack.setCurrentWidget(page)
        self.nav.set_active(href)

    def _on_user_changed(self, user):
        if user is None:
            logging.info("Session ended, closing main window")
            self.close()
            return
        self.setWindowTitle(f"{APP_TITLE} — {user.name}")

    def _reload(self):
        """Full reload so restored data is fetched fresh everywhere"""
        self.restart()


def _restart_application():
    """Restart the application process"""
    logging.info("Restarting application")
    subprocess.Popen([sys.executable] + sys.argv)
    QApplication.quit()
