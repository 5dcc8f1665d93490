import io

import pytest

from jitvcs.cli import Shell, help_text, main


@pytest.fixture
def shell(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    return Shell(out)


def _output(shell):
    text = shell.out.getvalue()
    shell.out.seek(0)
    shell.out.truncate()
    return text


def test_help_text_lists_commands():
    text = help_text()
    assert "\tjit init <path | .>\n" in text
    assert "\tjit goto new <name>\n" in text
    assert text.startswith("\n\n-----")


def test_unknown_command(shell):
    assert shell.execute("git status") is True
    assert _output(shell) == "Unknown command. Did you mean 'jit' ?\n"


def test_exit_and_quit_stop(shell):
    assert shell.execute("exit") is False
    assert shell.execute("quit") is False


def test_help_command_writes_help(shell):
    shell.execute("help")
    assert _output(shell) == help_text()


def test_init_creates_repository(shell, tmp_path):
    shell.execute("jit init .")
    assert (tmp_path / ".jit" / "head").read_text() == "ref: refs/branches/master\n"
    assert _output(shell) == ""


def test_second_init_reports_existing(shell):
    shell.execute("jit init .")
    shell.execute("jit init .")
    assert _output(shell) == "Working repository already initialized.\n"


def test_add_then_status_clean(shell, tmp_path):
    shell.execute("jit init .")
    (tmp_path / "a.txt").write_text("hello")
    shell.execute("jit add .")
    assert _output(shell) == "ADDED:    a.txt\n"
    shell.execute("jit status")
    assert _output(shell) == "Nothing to commit, working tree clean.\n"


def test_status_reports_modified_and_deleted(shell, tmp_path):
    shell.execute("jit init .")
    (tmp_path / "a.txt").write_text("one")
    (tmp_path / "b.txt").write_text("two")
    shell.execute("jit add .")
    _output(shell)
    (tmp_path / "a.txt").write_text("changed")
    (tmp_path / "b.txt").unlink()
    shell.execute("jit status")
    text = _output(shell)
    assert "DELETED: b.txt\n" in text
    assert "MODIFIED:    a.txt\n" in text


def test_commit_log_and_cat_file(shell, tmp_path):
    shell.execute("jit init .")
    (tmp_path / "a.txt").write_text("data")
    shell.execute("jit commit first change")
    tip = (tmp_path / ".jit" / "refs" / "branches" / "master").read_text()
    _output(shell)
    shell.execute(f"jit cat-file -t {tip}")
    assert _output(shell) == "commit\n"
    shell.execute(f"jit cat-file -p {tip}")
    assert "\nfirst change \n" in _output(shell)
    shell.execute("jit log")
    log = _output(shell)
    assert log.startswith("------------------------------------\ntree\t\t")
    assert log.count("------------------------------------") == 1


def test_log_follows_parents(shell, tmp_path):
    shell.execute("jit init .")
    (tmp_path / "a.txt").write_text("one")
    shell.execute("jit commit first")
    (tmp_path / "a.txt").write_text("two")
    shell.execute("jit commit second")
    _output(shell)
    shell.execute("jit log")
    log = _output(shell)
    assert log.count("------------------------------------") == 2
    assert log.index("second") < log.index("first")


def test_log_without_commits(shell):
    shell.execute("jit init .")
    shell.execute("jit log")
    assert _output(shell) == (
        "fatal: your current branch does not have any commits yet.\n"
    )


def test_branch_commands(shell):
    shell.execute("jit init .")
    shell.execute("jit current")
    assert _output(shell) == "* master\n"
    shell.execute("jit branch feature")
    shell.execute("jit branches")
    assert _output(shell) == "* master\nfeature\n"
    shell.execute("jit goto new topic")
    shell.execute("jit current")
    assert _output(shell) == "* topic\n"
    shell.execute("jit goto master")
    shell.execute("jit current")
    assert _output(shell) == "* master\n"


def test_delete_branch(shell, tmp_path):
    shell.execute("jit init .")
    shell.execute("jit branch feature")
    shell.execute("jit delete -b feature")
    assert not (tmp_path / ".jit" / "refs" / "branches" / "feature").exists()
    shell.execute("jit delete -b master")
    assert _output(shell) == (
        "error: Cannot delete a branch HEAD is pointing to.\n"
    )


def test_delete_missing_branch(shell):
    shell.execute("jit init .")
    shell.execute("jit delete -b ghost")
    assert _output(shell) == "error: file deletion unsuccessful.\n"


def test_missing_argument(shell):
    shell.execute("jit init .")
    shell.execute("jit branch")
    assert _output(shell).startswith("error: missing argument")


def test_command_outside_repository(shell):
    shell.execute("jit status")
    assert _output(shell).startswith("fatal: not a jit repository")


def test_run_stops_at_exit(shell, tmp_path):
    code = shell.run(["jit init .\n", "exit\n", "jit branch late\n"])
    assert code == 0
    text = _output(shell)
    assert text.startswith("\nWelcome to Jit!")
    assert text.count("jit > ") == 2
    assert not (tmp_path / ".jit" / "refs" / "branches" / "late").exists()


def test_run_handles_blank_lines(shell):
    shell.run(["", "jit foo", ""])
    assert _output(shell).count("jit > ") == 4


def test_main_runs_single_command(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["init", "."]) == 0
    assert (tmp_path / ".jit" / "index.json").is_file()
    main(["jit", "current"])
    assert capsys.readouterr().out == "* master\n"