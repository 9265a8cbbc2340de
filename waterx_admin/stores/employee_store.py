"""
Employee lookup
Loads the employee list so the profile form can show the current user's details
"""

import logging
from typing import Any, Dict, List, Optional

from PySide6.QtCore import QObject, Signal

from waterx_admin.api import ApiError
from waterx_admin.config import EMPLOYEES_ENDPOINT
from waterx_admin.models import NOTIFY_ERROR


class EmployeeStore(QObject):
    employees_changed = Signal(list)
    notify = Signal(str, str)  # level, message

    def __init__(self, api, parent=None):
        super().__init__(parent)
        self.api = api
        self.employees: List[Dict[str, Any]] = []
        self.is_loading = False

    def fetch_employees(self):
        self.is_loading = True
        try:
            payload = self.api.api(EMPLOYEES_ENDPOINT)
        except ApiError as e:
            logging.error(f"Failed to fetch employees: {e.message}")
            self.notify.emit(NOTIFY_ERROR, e.message or "Failed to fetch employees")
            return
        finally:
            self.is_loading = False
        # Paged responses wrap the rows in {items: [...]}
        if isinstance(payload, dict):
            payload = payload.get("items", [])
        self.employees = list(payload or [])
        logging.info(f"Loaded {len(self.employees)} employees")
        self.employees_changed.emit(self.employees)

    def find(self, employee_id) -> Optional[Dict[str, Any]]:
        if employee_id is None:
            return None
        for employee in self.employees:
            if str(employee.get("id")) == str(employee_id):
                return employee
        return None
