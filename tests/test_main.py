"""Test the command line entry point."""

import pytest
from unittest.mock import patch
from termedit import __main__ as cli
from termedit.config import EditorConfig
from termedit.terminal import TerminalError
from termedit.version import get_version_string


def test_version_flag(capsys, monkeypatch):
    monkeypatch.setattr('sys.argv', ['termedit', '--version'])
    cli.main()
    assert capsys.readouterr().out.strip() == get_version_string()


def test_filename_is_loaded_before_run(monkeypatch, tmp_path):
    target = tmp_path / "doc.txt"
    target.write_bytes(b"hello\n")
    monkeypatch.setattr('sys.argv', ['termedit', str(target)])
    with patch('termedit.config.load_config', return_value=EditorConfig()), \
         patch('termedit.logsetup.configure_logging'), \
         patch('termedit.editor.Editor.run') as run, \
         patch('termedit.editor.Editor.load_file') as load_file:
        cli.main()
    load_file.assert_called_once_with(str(target))
    run.assert_called_once()


def test_raw_mode_failure_exits_with_error(capsys, monkeypatch):
    monkeypatch.setattr('sys.argv', ['termedit'])
    with patch('termedit.config.load_config', return_value=EditorConfig()), \
         patch('termedit.logsetup.configure_logging'), \
         patch('termedit.editor.Editor.run', side_effect=TerminalError("not a tty")):
        with pytest.raises(SystemExit) as exc:
            cli.main()
    assert exc.value.code == 1
    assert "Failed setting the terminal to Raw Mode" in capsys.readouterr().err
