"""Test loading and saving files, including the save-as prompt."""

import os
from unittest.mock import Mock
from termedit.editor import Editor
from termedit.keyboard import KeyEvent, Key


def create_editor():
    editor = Editor(terminal=Mock())
    editor.resize(10, 80)
    return editor


def type_text(editor, text):
    for ch in text:
        editor.process_key(KeyEvent(Key.CHAR, ch.encode()))


def test_save_file_creates_file(tmp_path):
    """save_file writes every line with a trailing newline."""
    editor = create_editor()
    editor.store.load([b"First line", b"Second\tline", b""])
    editor.store.dirty = True
    target = tmp_path / "out.txt"

    assert editor.save_file(str(target)) is True
    assert target.read_bytes() == b"First line\nSecond\tline\n\n"
    assert editor.dirty is False
    assert editor.status_message == "24 bytes written to disk"


def test_save_file_overwrites_existing_and_keeps_mode(tmp_path):
    target = tmp_path / "existing.txt"
    target.write_bytes(b"old content that is longer than the new one\n")
    os.chmod(target, 0o640)

    editor = create_editor()
    editor.load_file(str(target))
    editor.store.load([b"new"])
    assert editor.save_file(str(target)) is True
    assert target.read_bytes() == b"new\n"
    assert (os.stat(target).st_mode & 0o777) == 0o640


def test_save_failure_reports_and_keeps_dirty(tmp_path):
    """An I/O error shows a message, keeps the document modified, and
    leaves no temporary files behind."""
    editor = create_editor()
    type_text(editor, "unsaved")
    target = tmp_path / "missing_dir" / "out.txt"

    assert editor.save_file(str(target)) is False
    assert editor.status_message.startswith("Can't save! I/O error:")
    assert editor.dirty is True
    assert list(tmp_path.iterdir()) == []


def test_ctrl_s_with_filename_saves(tmp_path):
    target = tmp_path / "doc.txt"
    target.write_bytes(b"abc\n")
    editor = create_editor()
    editor.load_file(str(target))
    editor.cursor.x = 3
    type_text(editor, "d")
    editor.process_key(KeyEvent(Key.SAVE))
    assert target.read_bytes() == b"abcd\n"
    assert editor.dirty is False
    assert editor.prompt_mode is False


def test_ctrl_s_without_filename_prompts(tmp_path):
    editor = create_editor()
    type_text(editor, "hello")
    editor.process_key(KeyEvent(Key.SAVE))
    assert editor.prompt_mode is True
    assert editor.status_message == "Save as: "

    target = str(tmp_path / "typed.txt")
    type_text(editor, target + "xx")
    editor.process_key(KeyEvent(Key.BACKSPACE))
    editor.process_key(KeyEvent(Key.DELETE))
    assert editor.prompt_input == target
    # Prompt keys never reach the document
    assert [line.raw for line in editor.store] == [b"hello"]

    editor.process_key(KeyEvent(Key.ENTER))
    assert editor.prompt_mode is False
    assert editor.filename == target
    with open(target, 'rb') as f:
        assert f.read() == b"hello\n"
    assert editor.dirty is False


def test_prompt_enter_with_empty_input_keeps_prompting():
    editor = create_editor()
    editor.process_key(KeyEvent(Key.SAVE))
    editor.process_key(KeyEvent(Key.ENTER))
    assert editor.prompt_mode is True
    assert editor.filename is None


def test_prompt_escape_aborts_save():
    editor = create_editor()
    type_text(editor, "x")
    editor.process_key(KeyEvent(Key.SAVE))
    type_text(editor, "name.txt")
    editor.process_key(KeyEvent(Key.ESCAPE))
    assert editor.prompt_mode is False
    assert editor.filename is None
    assert editor.status_message == "Save aborted"
    assert editor.dirty is True


def test_prompt_ignores_control_and_non_ascii_bytes():
    editor = create_editor()
    editor.process_key(KeyEvent(Key.SAVE))
    editor.process_key(KeyEvent(Key.CHAR, b"\t"))
    editor.process_key(KeyEvent(Key.CHAR, "é".encode("utf-8")))
    editor.process_key(KeyEvent(Key.CHAR, b"a"))
    assert editor.prompt_input == "a"


def test_load_file_strips_line_endings(tmp_path):
    source = tmp_path / "in.txt"
    source.write_bytes(b"one\r\ntwo\n\tthree\n")
    editor = create_editor()

    assert editor.load_file(str(source)) is True
    assert [line.raw for line in editor.store] == [b"one", b"two", b"\tthree"]
    assert editor.filename == str(source)
    assert editor.dirty is False


def test_load_then_save_round_trip(tmp_path):
    source = tmp_path / "in.txt"
    content = b"alpha\n\n\tbeta\ngamma  \n"
    source.write_bytes(content)
    editor = create_editor()
    editor.load_file(str(source))
    editor.save_file(str(source))
    assert source.read_bytes() == content


def test_load_missing_file_starts_empty(tmp_path):
    missing = str(tmp_path / "new.txt")
    editor = create_editor()
    assert editor.load_file(missing) is False
    assert editor.store.line_count == 0
    assert editor.filename == missing
    assert editor.dirty is False


def test_save_prompt_does_not_expire_while_open():
    """A slow typist still sees what they are typing."""
    editor = create_editor()
    editor.process_key(KeyEvent(Key.SAVE))
    type_text(editor, "a")
    later = editor.status_time + 6
    frame = editor.compose_frame(now=later)
    assert editor.prompt_mode is True
    assert b"Save as: a" in frame

    editor.process_key(KeyEvent(Key.ESCAPE))
    frame = editor.compose_frame(now=editor.status_time + 6)
    assert b"Save as:" not in frame
