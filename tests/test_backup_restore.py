import json
import re
from datetime import datetime, timezone

import httpx
import pytest

from waterx_admin.controllers import BackupRestoreController
from waterx_admin.models import RestoreState

EXPORT_TIME = datetime(2026, 3, 5, 23, 30, tzinfo=timezone.utc)


class FakeScheduler:
    def __init__(self):
        self.calls = []

    def __call__(self, delay_ms, callback):
        self.calls.append((delay_ms, callback))


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def controller(api, scheduler):
    return BackupRestoreController(api, schedule=scheduler, clock=lambda: EXPORT_TIME)


@pytest.fixture
def notes(controller, signal_recorder):
    return signal_recorder.watch(controller.notify, "notify")


def _backup_file(tmp_path, content, name="backup.json"):
    path = tmp_path / name
    path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
    return path


def _confirm(controller, path):
    controller.select_file(path)
    assert controller.request_restore()
    return controller.confirm_restore()


# ----------------------------------------------------------------------
# Export
# ----------------------------------------------------------------------
def test_export_writes_dated_pretty_json(controller, backend, tmp_path, notes):
    data = {"customers": [{"id": 1, "name": "Café"}], "products": [], "orders": []}
    backend.route("GET", "/api/backup", json_body=data)

    path = controller.export_backup(tmp_path)

    assert path.name == "waterx-backup-2026-03-05.json"
    assert re.fullmatch(r"waterx-backup-\d{4}-\d{2}-\d{2}\.json", path.name)
    text = path.read_text(encoding="utf-8")
    assert text == json.dumps(data, indent=2, ensure_ascii=False)
    assert notes == [("success", "Backup exported successfully!")]
    assert controller.state is RestoreState.IDLE


def test_export_reports_exporting_state(controller, backend, tmp_path, signal_recorder):
    states = signal_recorder.watch(controller.state_changed, "state")
    backend.route("GET", "/api/backup", json_body={"customers": [], "products": [], "orders": []})
    controller.export_backup(tmp_path)
    assert states == [RestoreState.EXPORTING, RestoreState.IDLE]


def test_export_failure_leaves_no_file(controller, backend, tmp_path, notes):
    backend.route("GET", "/api/backup", status=500, json_body={"success": False, "error": "Backup failed"})

    assert controller.export_backup(tmp_path) is None

    assert list(tmp_path.iterdir()) == []
    assert notes == [("error", "Backup failed")]
    assert controller.state is RestoreState.IDLE


def test_export_network_error(controller, backend, tmp_path, notes):
    backend.route("GET", "/api/backup", raises=httpx.ConnectError("offline"))
    assert controller.export_backup(tmp_path) is None
    assert notes[0][0] == "error"
    assert list(tmp_path.iterdir()) == []


def test_export_into_missing_folder_fails_cleanly(controller, backend, tmp_path, notes):
    backend.route("GET", "/api/backup", json_body={"customers": [], "products": [], "orders": []})
    assert controller.export_backup(tmp_path / "missing") is None
    assert notes[0][0] == "error"
    assert controller.state is RestoreState.IDLE


def test_export_keeps_file_selection(controller, backend, tmp_path):
    selected = _backup_file(tmp_path, {"customers": [], "products": [], "orders": []})
    controller.select_file(selected)
    backend.route("GET", "/api/backup", json_body={"customers": [], "products": [], "orders": []})
    out = tmp_path / "out"
    out.mkdir()

    controller.export_backup(out)

    assert controller.state is RestoreState.FILE_SELECTED
    assert controller.selected_file == selected


# ----------------------------------------------------------------------
# Restore
# ----------------------------------------------------------------------
def test_restore_valid_backup_posts_and_reloads(controller, backend, tmp_path, scheduler, notes, signal_recorder):
    reloads = signal_recorder.watch(controller.reload_requested, "reload")
    backend.route("POST", "/api/restore", json_body={"success": True, "data": None})
    path = _backup_file(tmp_path, '{"customers":[],"products":[],"orders":[]}')

    assert _confirm(controller, path) is True

    (request,) = backend.calls("POST", "/api/restore")
    assert backend.body(request) == {"customers": [], "products": [], "orders": []}
    assert notes == [("success", "System restored successfully! The application will now reload.")]
    assert controller.state is RestoreState.RELOADING

    (delay, callback), = scheduler.calls
    assert delay == 2000
    assert reloads == []
    callback()
    assert len(reloads) == 1


def test_restore_sends_extra_keys_untouched(controller, backend, tmp_path):
    backend.route("POST", "/api/restore", json_body={"success": True})
    payload = {"customers": [{"id": 1}], "products": [], "orders": [], "transactions": [], "employees": [{"id": 7}]}
    _confirm(controller, _backup_file(tmp_path, payload))
    (request,) = backend.calls("POST", "/api/restore")
    assert backend.body(request) == payload


def test_restore_rejects_foreign_json(controller, backend, tmp_path, notes):
    path = _backup_file(tmp_path, '{"foo":1}')

    assert _confirm(controller, path) is False

    assert backend.calls("POST", "/api/restore") == []
    assert notes == [("error", "Invalid backup file format.")]
    assert controller.state is RestoreState.IDLE


@pytest.mark.parametrize("missing", ["customers", "products", "orders"])
def test_restore_requires_every_key(controller, backend, tmp_path, notes, missing):
    payload = {"customers": [], "products": [], "orders": []}
    del payload[missing]

    assert _confirm(controller, _backup_file(tmp_path, payload)) is False

    assert backend.requests == []
    assert notes[0] == ("error", "Invalid backup file format.")


@pytest.mark.parametrize("payload", [
    {"customers": None, "products": 0, "orders": ""},
    {"customers": [], "products": [], "orders": []},
])
def test_restore_does_not_inspect_values(controller, backend, tmp_path, payload):
    backend.route("POST", "/api/restore", json_body={"success": True})
    assert _confirm(controller, _backup_file(tmp_path, payload)) is True
    assert len(backend.calls("POST", "/api/restore")) == 1


def test_restore_rejects_non_object_json(controller, backend, tmp_path, notes):
    assert _confirm(controller, _backup_file(tmp_path, "[1, 2, 3]")) is False
    assert notes == [("error", "Invalid backup file format.")]
    assert backend.requests == []


def test_restore_unparseable_file(controller, backend, tmp_path, notes):
    assert _confirm(controller, _backup_file(tmp_path, "{not json")) is False
    assert notes == [("error", "Failed to parse backup file.")]
    assert backend.requests == []
    assert controller.state is RestoreState.IDLE


def test_restore_read_failure_returns_to_idle(controller, backend, tmp_path, notes):
    path = _backup_file(tmp_path, {"customers": [], "products": [], "orders": []})
    controller.select_file(path)
    controller.request_restore()
    path.unlink()

    assert controller.confirm_restore() is False

    assert notes == [("error", "Failed to read the backup file.")]
    assert controller.state is RestoreState.IDLE
    assert controller.selected_file is None


def test_restore_server_failure(controller, backend, tmp_path, scheduler, notes):
    backend.route("POST", "/api/restore", status=500, json_body={"success": False, "error": "Restore failed on server"})

    assert _confirm(controller, _backup_file(tmp_path, {"customers": [], "products": [], "orders": []})) is False

    assert notes == [("error", "Restore failed on server")]
    assert controller.state is RestoreState.IDLE
    assert scheduler.calls == []


def test_restore_without_file_only_warns(controller, notes, signal_recorder):
    states = signal_recorder.watch(controller.state_changed, "state")
    confirms = signal_recorder.watch(controller.confirm_requested, "confirm")

    assert controller.request_restore() is False

    assert notes == [("warning", "Please select a backup file to restore.")]
    assert states == []
    assert confirms == []
    assert controller.state is RestoreState.IDLE


def test_confirmation_names_selected_file(controller, tmp_path, signal_recorder):
    confirms = signal_recorder.watch(controller.confirm_requested, "confirm")
    controller.select_file(_backup_file(tmp_path, "{}", name="waterx-backup-2026-01-01.json"))
    controller.request_restore()
    assert confirms == ["waterx-backup-2026-01-01.json"]
    assert controller.state is RestoreState.CONFIRM_PENDING


def test_cancel_returns_to_file_selected(controller, backend, tmp_path):
    path = _backup_file(tmp_path, {"customers": [], "products": [], "orders": []})
    controller.select_file(path)
    controller.request_restore()

    controller.cancel_restore()

    assert controller.state is RestoreState.FILE_SELECTED
    assert controller.selected_file == path
    assert backend.requests == []


def test_selecting_again_replaces_file(controller, tmp_path):
    first = _backup_file(tmp_path, "{}", name="a.json")
    second = _backup_file(tmp_path, "not even json", name="b.json")
    controller.select_file(first)
    controller.select_file(second)
    assert controller.selected_file == second
    assert controller.state is RestoreState.FILE_SELECTED


def test_confirm_without_pending_dialog_does_nothing(controller, backend, tmp_path):
    controller.select_file(_backup_file(tmp_path, {"customers": [], "products": [], "orders": []}))
    assert controller.confirm_restore() is False
    assert backend.requests == []
    assert controller.state is RestoreState.FILE_SELECTED


def test_split_restore_flow(controller, backend, tmp_path):
    from waterx_admin.utils import read_text

    backend.route("POST", "/api/restore", json_body={"success": True})
    controller.select_file(_backup_file(tmp_path, {"customers": [], "products": [], "orders": []}))
    controller.request_restore()

    path = controller.begin_restore()
    assert controller.state is RestoreState.RESTORING
    assert controller.is_restoring

    assert controller.finish_restore(read_text(path)) is True
    assert controller.state is RestoreState.RELOADING


# ----------------------------------------------------------------------
# Unexpected failures
# ----------------------------------------------------------------------
def test_restore_too_deeply_nested_returns_to_idle(controller, backend, tmp_path, notes):
    path = _backup_file(tmp_path, "[" * 200000 + "]" * 200000)

    assert _confirm(controller, path) is False

    assert notes == [("error", "An unknown error occurred during restore.")]
    assert controller.state is RestoreState.IDLE
    assert controller.selected_file is None
    assert backend.requests == []


def test_restore_unexpected_transport_error_returns_to_idle(controller, backend, tmp_path, scheduler, notes):
    backend.route("POST", "/api/restore", raises=RuntimeError("socket exploded"))

    assert _confirm(controller, _backup_file(tmp_path, {"customers": [], "products": [], "orders": []})) is False

    assert notes == [("error", "An unknown error occurred during restore.")]
    assert controller.state is RestoreState.IDLE
    assert scheduler.calls == []


def test_restore_invalid_utf8_is_a_parse_error(controller, backend, tmp_path, notes):
    path = tmp_path / "backup.json"
    path.write_bytes(b'{"customers": [], "products": [], "orders": [\xff\xfe]}')

    assert _confirm(controller, path) is False

    assert notes == [("error", "Failed to parse backup file.")]
    assert controller.state is RestoreState.IDLE


def test_export_unexpected_error_is_reported(controller, backend, tmp_path, notes):
    backend.route("GET", "/api/backup", raises=RuntimeError("socket exploded"))

    assert controller.export_backup(tmp_path) is None

    assert notes == [("error", "socket exploded")]
    assert controller.state is RestoreState.IDLE
    assert list(tmp_path.iterdir()) == []


def test_second_export_while_exporting_is_ignored(controller, backend, tmp_path):
    nested = []
    backend.route(
        "GET", "/api/backup",
        json_body={"customers": [], "products": [], "orders": []},
        on_request=lambda _request: nested.append(controller.export_backup(tmp_path)),
    )

    path = controller.export_backup(tmp_path)

    assert path is not None and path.exists()
    assert nested == [None]
    assert len(backend.calls("GET", "/api/backup")) == 1
    assert controller.state is RestoreState.IDLE


def test_failed_restore_task_resets_controller(qapp, controller, backend, tmp_path, notes):
    from waterx_admin.utils.workers import TaskWorker

    def boom(_result):
        raise RuntimeError("worker crashed")

    controller.select_file(_backup_file(tmp_path, {"customers": [], "products": [], "orders": []}))
    controller.request_restore()
    controller.begin_restore()

    worker = TaskWorker(boom, None)
    worker.failed.connect(controller.task_failed)
    worker.run()

    assert notes == [("error", "worker crashed")]
    assert controller.state is RestoreState.IDLE
    assert controller.selected_file is None


def test_failed_export_task_returns_to_file_selected(controller, tmp_path, notes):
    path = _backup_file(tmp_path, "{}")
    controller.select_file(path)
    controller._enter((RestoreState.FILE_SELECTED,), RestoreState.EXPORTING)

    controller.task_failed("disk gone")

    assert notes == [("error", "disk gone")]
    assert controller.state is RestoreState.FILE_SELECTED
    assert controller.selected_file == path


def test_task_failure_while_idle_only_notifies(controller, notes):
    controller.task_failed("late failure")
    assert notes == [("error", "late failure")]
    assert controller.state is RestoreState.IDLE
