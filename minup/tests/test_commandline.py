"""
Tests for the C{minup} command line, L{minup.driver.main}.
"""
import io
from pathlib import Path

import pytest

from minup import __version__, test
from minup.driver import main


def write(path: Path, text: str) -> Path:
    path.write_text(text, encoding='utf-8')
    return path

def test_self_test(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(['--self-test']) == 0
    assert capsys.readouterr().out == test() + '\n'

def test_file_to_stdout(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    doc = write(workdir / 'doc.mu', '*x*')
    assert main([str(doc)]) == 0
    assert capsys.readouterr().out == '<p><b>x</b></p>\n'

def test_several_files(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    a = write(workdir / 'a.mu', '*a*')
    b = write(workdir / 'b.mu', '_b_')
    assert main([str(a), str(b)]) == 0
    assert capsys.readouterr().out == '<p><b>a</b></p>\n<p><i>b</i></p>\n'

def test_stdin(workdir: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('sys.stdin', io.StringIO('_y_\n\nz'))
    assert main([]) == 0
    assert capsys.readouterr().out == '<p><i>y</i></p><p>z</p>\n'

def test_dash_is_stdin(workdir: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('sys.stdin', io.StringIO('[n]'))
    assert main(['-']) == 0
    assert capsys.readouterr().out == "<p><span class='note'>NOTE:&nbsp;n</span></p>\n"

def test_encoding(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    doc = workdir / 'doc.mu'
    doc.write_bytes('café'.encode('latin-1'))
    assert main(['--encoding', 'latin-1', str(doc)]) == 0
    assert capsys.readouterr().out == '<p>café</p>\n'

def test_html_output(workdir: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    doc = write(workdir / 'notes.mu', '*x*')
    monkeypatch.setattr('sys.stdin', io.StringIO('_y_'))
    out = workdir / 'out' / 'html'
    assert main(['--html-output', str(out), str(doc), '-']) == 0
    assert capsys.readouterr().out == ''
    assert (out / 'notes.html').read_text(encoding='utf-8') == '<p><b>x</b></p>'
    assert (out / 'stdin.html').read_text(encoding='utf-8') == '<p><i>y</i></p>'

def test_standalone(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    doc = write(workdir / 'notes.mu', '*x*')
    assert main(['--standalone', str(doc)]) == 0
    out = capsys.readouterr().out
    assert out.startswith('<?xml')
    assert '<title>notes</title>' in out
    assert '<b>x</b>' in out

def test_standalone_title_and_stylesheet(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    doc = write(workdir / 'notes.mu', 'x')
    assert main(['--standalone', '--title', 'Shopping', '--stylesheet', 'site.css', str(doc)]) == 0
    out = capsys.readouterr().out
    assert '<title>Shopping</title>' in out
    assert 'href="site.css"' in out

def test_missing_file(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as e:
        main([str(workdir / 'nope.mu')])
    assert e.value.code == 1
    assert 'Cannot read' in capsys.readouterr().err

def test_undecodable_file(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    doc = workdir / 'doc.mu'
    doc.write_bytes(b'\xff\xfe\xfa')
    with pytest.raises(SystemExit) as e:
        main([str(doc)])
    assert e.value.code == 1
    assert 'Cannot read' in capsys.readouterr().err

def test_unknown_option(workdir: Path) -> None:
    with pytest.raises(SystemExit) as e:
        main(['--no-such-option'])
    assert e.value.code == 2

def test_version(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as e:
        main(['--version'])
    assert e.value.code == 0
    assert f'minup {__version__}' in capsys.readouterr().out

def test_info_logging(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    doc = write(workdir / 'doc.mu', '*x* _y_')
    assert main(['-v', str(doc)]) == 0
    err = capsys.readouterr().err
    assert 'INFO: doc: 2 inline spans' in err
    assert 'DEBUG' not in err

def test_debug_logging(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    doc = write(workdir / 'doc.mu', '*x*')
    assert main(['-vv', str(doc)]) == 0
    assert "DEBUG: bold at 1-4: 'x'" in capsys.readouterr().err

def test_quiet_by_default(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    doc = write(workdir / 'doc.mu', '*x*')
    assert main([str(doc)]) == 0
    assert capsys.readouterr().err == ''
