"""Tests for the unipen and unipen-data command-line tools"""

import pytest

from unipen import cli, data_cli
from unipen.config import SETTINGS_FILE


@pytest.fixture(autouse=True)
def user_dir(tmp_path, monkeypatch):
    directory = tmp_path / "user-data"
    monkeypatch.setenv("UNIPEN_DATA_DIR", str(directory))
    return directory


def write(path, content):
    path.write_text(content, encoding="utf-8")
    return path


class TestUniPenCli:
    def test_summary(self, tmp_path, capsys):
        source = write(tmp_path / "a.dat", ".VERSION 1.0\n.COORD X Y\n.PEN_DOWN\n1 2\n.PEN_DOWN\n3 4\n")

        assert cli.main([str(source)]) == 0

        out = capsys.readouterr().out
        assert "Statements: 4" in out
        assert ".PEN_DOWN" in out
        assert "Log file:" in out
        assert (tmp_path / "logs").is_dir()

    def test_include_dir_argument(self, tmp_path, capsys):
        source = write(tmp_path / "a.dat", ".INCLUDE b.dat\n")
        write(tmp_path / "b.dat", ".DATA_ID b\n")

        assert cli.main([str(source), str(tmp_path)]) == 0
        assert "Files (2):" in capsys.readouterr().out

    def test_echo(self, tmp_path, capsys):
        source = write(tmp_path / "a.dat", ".HIERARCHY  PAGE   WORD\n.COMMENT x\n")

        assert cli.main([str(source), "--echo"]) == 0
        assert capsys.readouterr().out.startswith(".HIERARCHY PAGE WORD\n")

    def test_syntax_error(self, tmp_path, capsys):
        source = write(tmp_path / "a.dat", ".VERSION 1.0\n.SKILL GREAT\n")

        assert cli.main([str(source)]) == 1

        out = capsys.readouterr().out
        assert "a.dat:2:8" in out
        assert "expected one of {BAD, OK, GOOD, ?}" in out

    def test_missing_input(self, tmp_path, capsys):
        assert cli.main([str(tmp_path / "missing.dat")]) == 1
        assert "does not exist" in capsys.readouterr().out

    def test_settings_file(self, tmp_path, capsys):
        source = write(tmp_path / "a.dat", ".COORD X Y\n.PEN_DOWN\n1 2\n.SEGMENT WORD 0-4\n")
        settings = write(tmp_path / "strict.yaml", "strict_component_refs: true\n")

        assert cli.main([str(source)]) == 0
        assert cli.main([str(source), "--settings", str(settings)]) == 1
        assert "component 4 does not exist" in capsys.readouterr().out


class TestDataCli:
    def test_no_command(self, capsys):
        assert data_cli.main([]) == 1

    def test_path(self, user_dir, capsys):
        assert data_cli.main(["path"]) == 0
        assert capsys.readouterr().out.strip() == str(user_dir)

    def test_info(self, capsys):
        assert data_cli.main(["info"]) == 0
        assert SETTINGS_FILE in capsys.readouterr().out

    def test_copy_and_reset(self, user_dir):
        assert data_cli.main(["copy", SETTINGS_FILE]) == 0
        assert (user_dir / SETTINGS_FILE).exists()
        assert data_cli.main(["copy", SETTINGS_FILE]) == 1
        assert data_cli.main(["reset", "--all"]) == 0
        assert not (user_dir / SETTINGS_FILE).exists()

    def test_reset_needs_target(self):
        assert data_cli.main(["reset"]) == 1
