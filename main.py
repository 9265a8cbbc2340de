#!/usr/bin/env python3
"""
WaterX Admin - Main Entry Point
Desktop administration panel for the WaterX backend
"""

import sys
import logging
from logging.handlers import RotatingFileHandler
import argparse
import os
from PySide6.QtWidgets import QApplication, QMessageBox
from PySide6.QtCore import QLockFile, QDir

from waterx_admin.api import ApiClient
from waterx_admin.config import APP_NAME, APP_TITLE, APP_QSS
from waterx_admin.controllers import BackupRestoreController, SettingsPageController
from waterx_admin.settings_manager import bootstrap_settings, resolve_server
from waterx_admin.stores import AuthSession, EmployeeStore, SettingsStore
from waterx_admin.ui.main_window import MainWindow

# Enhanced logging with file rotation
logs_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'logs')
os.makedirs(logs_dir, exist_ok=True)

log_file = os.path.join(logs_dir, 'waterx_admin.log')

# Create formatters
file_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
)
console_formatter = logging.Formatter(
    '%(asctime)s - %(levelname)s - %(message)s'
)

# Create file handler with rotation (10MB max, keep 5 backups)
file_handler = RotatingFileHandler(
    log_file,
    maxBytes=10*1024*1024,  # 10MB
    backupCount=5,
    encoding='utf-8'
)
file_handler.setLevel(logging.INFO)
file_handler.setFormatter(file_formatter)

# Create console handler
console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)
console_handler.setFormatter(console_formatter)

# Configure root logger
root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)
root_logger.addHandler(file_handler)
root_logger.addHandler(console_handler)


def exception_hook(exc_type, exc_value, exc_traceback):
    """Global exception handler for crash logging"""
    import traceback
    from datetime import datetime

    logging.critical("Unhandled exception occurred!", exc_info=(exc_type, exc_value, exc_traceback))

    # Auto-export crash log to file
    try:
        crash_log_path = os.path.join(logs_dir, f"crash_log_{datetime.now().strftime('%Y%m%d_%H%M%S')}.txt")
        with open(crash_log_path, 'w', encoding='utf-8') as f:
            f.write(f"Crash Log - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write("=" * 60 + "\n\n")
            traceback.print_exception(exc_type, exc_value, exc_traceback, file=f)
        logging.info(f"Crash log auto-exported to: {crash_log_path}")
    except OSError as e:
        logging.error(f"Failed to auto-export crash log: {e}")

    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=APP_TITLE)
    parser.add_argument("--api-url", help="Backend base URL (overrides settings.ini)")
    parser.add_argument("--user-id", help="Signed-in employee id")
    parser.add_argument("--name", default="", help="Signed-in employee name")
    parser.add_argument("--role", default="admin", help="Signed-in employee role")
    return parser.parse_known_args(argv)[0]


def main():
    """Main application entry point"""
    sys.excepthook = exception_hook
    args = parse_args()

    logging.info("=" * 80)
    logging.info("WaterX Admin Starting")
    logging.info(f"Log file: {log_file}")
    logging.info("=" * 80)

    local_settings, server = bootstrap_settings()
    if args.api_url:
        server = resolve_server(env={"WATERX_API_URL": args.api_url}, ini=server)
        local_settings.update_server(server.base_url, server.timeout)
        local_settings.save()
    logging.info(f"Backend: {server.base_url} (timeout {server.timeout}s)")

    # Single instance check - prevent multiple instances per user
    lock_file = QLockFile(os.path.join(QDir.tempPath(), "waterx_admin.lock"))

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setStyle("Fusion")
    app.setStyleSheet(APP_QSS)

    if not lock_file.tryLock(100):
        QMessageBox.warning(
            None,
            "Application Already Running",
            f"{APP_TITLE} is already running.\n\n"
            "Please close the existing instance before opening a new one."
        )
        sys.exit(1)

    auth = AuthSession(local_settings)
    if args.user_id:
        auth.login(args.user_id, args.name, args.role)
    if auth.user is None:
        QMessageBox.critical(
            None,
            "Not Signed In",
            "No administrator session found.\n\n"
            "Start the panel with --user-id, --name and --role."
        )
        sys.exit(1)
    logging.info(f"User: {auth.user.name} ({auth.user.role})")

    api = ApiClient(server.base_url, timeout=server.timeout)
    app.aboutToQuit.connect(api.close)

    settings_store = SettingsStore(api)
    employee_store = EmployeeStore(api)
    page_controller = SettingsPageController(api, auth, settings_store, employee_store)
    backup_controller = BackupRestoreController(api)

    main_window = MainWindow(auth, settings_store, page_controller, backup_controller)
    # Store reference in app to prevent garbage collection
    app.main_window = main_window
    main_window.show()

    # Release the single-instance lock before a restart spawns the next process
    app.aboutToQuit.connect(lock_file.unlock)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
