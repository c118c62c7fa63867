import pytest

from cellpaint import __main__ as cli
from cellpaint.screen import ScreenError


def test_screen_error_aborts_before_drawing(monkeypatch, capsys):
    def fail():
        raise ScreenError("standard output is not a terminal")

    monkeypatch.setattr(cli.Screen, "open", staticmethod(fail))
    monkeypatch.setattr(cli, "run", lambda screen: pytest.fail("loop entered"))

    assert cli.main([]) == 1
    assert "not a terminal" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])

    assert exc.value.code == 0
    assert "cellpaint" in capsys.readouterr().out
