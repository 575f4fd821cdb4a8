"""Unit tests for EditSession."""

import os
import plistlib
import stat

import pytest

from launchdeck.api.document.DocumentError import InvalidFormat, ReadOnlyDocument
from launchdeck.api.document.EditSession import EditSession
from tests.unit.conftest import write_definition

pytestmark = pytest.mark.document


def test_open_is_clean(tmp_path):
    path = write_definition(tmp_path, "com.example.a.plist", "com.example.a", Program="/bin/true")
    session = EditSession.open(path)
    assert session.document.label == "com.example.a"
    assert not session.is_dirty


def test_edit_marks_dirty_and_save_clears(tmp_path):
    path = write_definition(tmp_path, "com.example.a.plist", "com.example.a", Sockets={"Listeners": {}})
    session = EditSession.open(path)
    session.document.run_at_load = True
    assert session.is_dirty

    written = session.save()
    assert not session.is_dirty
    assert path.read_bytes() == written
    on_disk = plistlib.loads(written)
    assert on_disk["RunAtLoad"] is True
    assert on_disk["Sockets"] == {"Listeners": {}}


def test_setting_same_value_is_not_dirty(tmp_path):
    path = write_definition(tmp_path, "com.example.a.plist", "com.example.a", StartInterval=60)
    session = EditSession.open(path)
    session.document.start_interval = 60
    assert not session.is_dirty


def test_save_keeps_file_mode_and_leaves_no_temp_files(tmp_path):
    path = write_definition(tmp_path, "com.example.a.plist", "com.example.a")
    os.chmod(path, 0o600)
    session = EditSession.open(path)
    session.document.nice = 10
    session.save()
    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert sorted(p.name for p in tmp_path.iterdir()) == ["com.example.a.plist"]


def test_read_only_session_refuses_save(tmp_path):
    path = write_definition(tmp_path, "com.example.a.plist", "com.example.a")
    original = path.read_bytes()
    session = EditSession.open(path, editable=False)
    session.document.keep_alive = True
    with pytest.raises(ReadOnlyDocument):
        session.save()
    assert path.read_bytes() == original


def test_revert_discards_changes(tmp_path):
    path = write_definition(tmp_path, "com.example.a.plist", "com.example.a", Program="/bin/true")
    session = EditSession.open(path)
    session.document.program = "/bin/false"
    session.revert()
    assert session.document.program == "/bin/true"
    assert not session.is_dirty


def test_open_invalid_file(tmp_path):
    path = tmp_path / "broken.plist"
    path.write_text("<plist>")
    with pytest.raises(InvalidFormat):
        EditSession.open(path)


def test_open_missing_file(tmp_path):
    with pytest.raises(OSError):
        EditSession.open(tmp_path / "missing.plist")
