"""Test that quitting with unsaved changes needs a second Ctrl-Q."""

from unittest.mock import Mock
from termedit.config import EditorConfig
from termedit.editor import Editor
from termedit.keyboard import KeyEvent, Key


def create_editor(dirty=False, config=None):
    editor = Editor(terminal=Mock(), config=config)
    editor.store.load([b"text"])
    editor.resize(10, 40)
    if dirty:
        editor.process_key(KeyEvent(Key.CHAR, b"x"))
    editor.running = True
    return editor


def quit_key():
    return KeyEvent(Key.QUIT)


def test_quit_clean_document_exits_immediately():
    editor = create_editor()
    editor.process_key(quit_key())
    assert editor.running is False


def test_quit_dirty_document_warns_first():
    editor = create_editor(dirty=True)
    editor.process_key(quit_key())
    assert editor.running is True
    assert "unsaved changes" in editor.status_message
    assert "Press Ctrl-Q 1 more time" in editor.status_message

    editor.process_key(quit_key())
    assert editor.running is False


def test_other_key_resets_quit_confirmation():
    editor = create_editor(dirty=True)
    editor.process_key(quit_key())
    editor.process_key(KeyEvent(Key.LEFT))
    editor.process_key(quit_key())
    assert editor.running is True
    editor.process_key(quit_key())
    assert editor.running is False


def test_quit_times_from_config():
    editor = create_editor(dirty=True, config=EditorConfig(quit_times=2))
    editor.process_key(quit_key())
    assert "Press Ctrl-Q 2 more time" in editor.status_message
    editor.process_key(quit_key())
    assert editor.running is True
    editor.process_key(quit_key())
    assert editor.running is False


def test_quit_after_save_exits_immediately(tmp_path):
    editor = create_editor(dirty=True)
    editor.save_file(str(tmp_path / "out.txt"))
    editor.process_key(quit_key())
    assert editor.running is False
