import io

import pydot
import pytest

from thompson_viz import cli


def run(monkeypatch, argv, line):
    monkeypatch.setattr("sys.stdin", io.StringIO(line))
    return cli.main(argv)


def test_writes_both_views(monkeypatch, tmp_path, capsys):
    code = run(monkeypatch, ["--output-dir", str(tmp_path), "--no-render"], "ab|c\n")
    assert code == 0
    assert (tmp_path / "naive.dot").exists()
    assert (tmp_path / "smart.dot").exists()
    out = capsys.readouterr().out
    assert out.startswith(cli.PROMPT)
    assert "naive.dot" in out


def test_syntax_error_produces_nothing(monkeypatch, tmp_path, capsys):
    code = run(monkeypatch, ["--output-dir", str(tmp_path), "--no-render"], "a**\n")
    assert code == 1
    assert list(tmp_path.iterdir()) == []
    assert capsys.readouterr().err.startswith("error: ")


def test_unknown_character_is_an_error(monkeypatch, tmp_path, capsys):
    code = run(monkeypatch, ["--output-dir", str(tmp_path), "--no-render"], "a+b\n")
    assert code == 1
    assert "'+'" in capsys.readouterr().err


def test_positional_argument_is_a_no_op(monkeypatch, tmp_path, capsys):
    stdin = io.StringIO("ab\n")
    monkeypatch.setattr("sys.stdin", stdin)
    code = cli.main(["--output-dir", str(tmp_path), "anything"])
    assert code == 0
    assert stdin.read() == "ab\n"
    assert list(tmp_path.iterdir()) == []
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("argv", [["-x"], ["--unknown", "value"], ["--no-render", "-x"]])
def test_any_other_argument_is_a_no_op(monkeypatch, tmp_path, capsys, argv):
    monkeypatch.chdir(tmp_path)
    stdin = io.StringIO("ab\n")
    monkeypatch.setattr("sys.stdin", stdin)
    assert cli.main(argv) == 0
    assert stdin.read() == "ab\n"
    assert list(tmp_path.iterdir()) == []
    captured = capsys.readouterr()
    assert captured.out == "" and captured.err == ""


def test_graphviz_failure_is_one_diagnostic(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(pydot.Dot, "create", fail_graphviz)
    code = run(monkeypatch, ["--output-dir", str(tmp_path)], "ab\n")
    assert code == 1
    assert (tmp_path / "naive.dot").exists()
    assert (tmp_path / "smart.dot").exists()
    err = capsys.readouterr().err
    assert err.startswith("error: ")
    assert len(err.strip().splitlines()) == 1


def fail_graphviz(self, *args, **kwargs):
    raise FileNotFoundError("dot not found in path")
