"""
Settings Page Controller
Profile editing and branding, composed over the auth session and settings store
"""

import logging
from dataclasses import replace
from typing import Dict

from PySide6.QtCore import QObject, Signal

from waterx_admin.api import ApiError
from waterx_admin.config import profile_path
from waterx_admin.models import ProfileFormValues, BrandingFormValues, NOTIFY_SUCCESS, NOTIFY_ERROR
from waterx_admin.validators import NameValidator, EmailValidator, PasswordValidator, UrlValidator


def validate_profile(values: ProfileFormValues) -> Dict[str, str]:
    """Field name -> message for every failing field"""
    errors = {}
    ok, msg = NameValidator.validate_name(values.name)
    if not ok:
        errors["name"] = msg
    ok, msg = EmailValidator.validate_email(values.email)
    if not ok:
        errors["email"] = msg
    ok, msg = PasswordValidator.validate_password(values.password)
    if not ok:
        errors["password"] = msg
    return errors


def validate_branding(values: BrandingFormValues) -> Dict[str, str]:
    ok, msg = UrlValidator.validate_url(values.logo_url)
    return {} if ok else {"logo_url": msg}


class SettingsPageController(QObject):
    """
    Backs the two independently submitted settings forms.

    The branding form follows the store one way only: it is reset when the
    stored logo value changes, never on every redraw, so typing is not
    overwritten.
    """

    profile_reset = Signal(object)  # ProfileFormValues
    branding_reset = Signal(object)  # BrandingFormValues
    notify = Signal(str, str)  # level, message

    def __init__(self, api, auth, settings_store, employee_store, parent=None):
        super().__init__(parent)
        self.api = api
        self.auth = auth
        self.settings = settings_store
        self.employees = employee_store
        self.is_submitting_profile = False

        self.settings.logo_url_changed.connect(self._on_logo_url_changed)
        self.employees.employees_changed.connect(self._on_employees_changed)

    def load(self):
        """Initial fetches for the page"""
        if self.current_employee() is None:
            self.employees.fetch_employees()
        self.settings.fetch_logo_url()

    def current_employee(self):
        user = self.auth.user
        return self.employees.find(user.id) if user else None

    def _on_employees_changed(self, _employees):
        employee = self.current_employee()
        if employee:
            self.profile_reset.emit(ProfileFormValues(
                name=employee.get("name", ""),
                email=employee.get("email", ""),
                password="",
            ))

    def _on_logo_url_changed(self, logo_url):
        if logo_url:
            self.branding_reset.emit(BrandingFormValues(logo_url=logo_url))

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------
    def submit_profile(self, values: ProfileFormValues) -> bool:
        if validate_profile(values):
            return False

        user = self.auth.user
        if user is None or not user.id:
            self.notify.emit(NOTIFY_ERROR, "User not found. Please log in again.")
            return False

        self.is_submitting_profile = True
        try:
            response = self.api.send(profile_path(user.id), method="PUT", json=values.to_payload())
            try:
                body = response.json()
            except ValueError:
                body = None
            if not isinstance(body, dict) or not body.get("success"):
                error = body.get("error") if isinstance(body, dict) else None
                raise ApiError(error or "Failed to update profile", response.status_code)
        except ApiError as e:
            logging.error(f"Profile update for user {user.id} failed: {e.message}")
            self.notify.emit(NOTIFY_ERROR, e.message or "An unknown error occurred.")
            return False
        finally:
            self.is_submitting_profile = False

        data = body.get("data") or {}
        logging.info(f"Profile updated for user {user.id}")
        self.notify.emit(NOTIFY_SUCCESS, "Profile updated successfully!")
        self.auth.login(user.id, data.get("name", values.name), data.get("role", user.role))
        self.profile_reset.emit(replace(values, password=""))
        return True

    # ------------------------------------------------------------------
    # Branding
    # ------------------------------------------------------------------
    def submit_branding(self, values: BrandingFormValues) -> bool:
        if validate_branding(values):
            return False
        return self.settings.update_logo_url(values.logo_url)

    def task_failed(self, message: str):
        """Background load or submit died unexpectedly"""
        message = message or "An unknown error occurred."
        logging.error(f"Settings task failed: {message}")
        self.is_submitting_profile = False
        self.settings.abort_loading(message)
        self.notify.emit(NOTIFY_ERROR, message)
