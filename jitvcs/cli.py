"""Interactive command shell for jit repositories."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, TextIO

from jitvcs.repository import BranchError, Repository, RepositoryError

PROMPT = "jit > "
WELCOME = (
    "\nWelcome to Jit!\nSimilar to Git, yet a bit different!\n\n"
    'For help, type in "help"\n\n'
)
_RULE = "--------------------------------------------------"
_LOG_RULE = "------------------------------------"

_HELP_ENTRIES = (
    ("init a repo:", "\tjit init <path | .>"),
    ("staging changes:", "\tjit add <list | .>"),
    ("commiting:", "\tjit commit <message>"),
    ("showing log:", "\tjit log"),
    ("creating a branch:", "\tjit branch <name>"),
    ("branch switch:", "\tjit goto <branch name | hash of branch>"),
    ("current branch:", "\tjit current"),
    ("all branches:", "\tjit branches"),
    ("delete a branch:", "\tjit delete -b <name>"),
    ("create + switch to branch:", "\tjit goto new <name>"),
    ("check the object type:", "\tjit cat-file -t <hash>"),
    ("check the object's content:", "\tjit cat-file -p <hash>"),
    ("unstaged changes:", "\tjit status"),
)


class _MissingArgument(Exception):
    """A command was given fewer words than it needs."""


def help_text() -> str:
    """Return the usage summary shown by the ``help`` command."""
    body = "".join(f"{title}\n{usage}\n" for title, usage in _HELP_ENTRIES)
    return f"\n\n{_RULE}\n\nJIT\n\n{body}\n{_RULE}\n\n"


class Shell:
    """Reads command lines and runs them against a repository."""

    def __init__(self, out: TextIO) -> None:
        self.out = out
        self.root: Path | None = None

    def _print(self, text: str = "") -> None:
        self.out.write(text + "\n")

    def _repository(self) -> Repository:
        return Repository(self.root if self.root is not None else Path.cwd())

    @staticmethod
    def _arg(args: list[str], position: int) -> str:
        try:
            return args[position]
        except IndexError:
            raise _MissingArgument from None

    def execute(self, line: str) -> bool:
        """Run one command line; return False when the shell should stop."""
        command = line.strip()
        if command in ("exit", "quit"):
            return False
        if not command:
            return True
        if command == "help":
            self.out.write(help_text())
            return True
        args = command.split()
        if args[0] != "jit":
            self._print("Unknown command. Did you mean 'jit' ?")
            return True
        try:
            self._dispatch(args)
        except _MissingArgument:
            self._print('error: missing argument. Type "help" for usage.')
        except BranchError as exc:
            self._print(f"error: {exc}")
        except RepositoryError as exc:
            self._print(f"fatal: {exc}")
        except KeyError as exc:
            self._print(f"fatal: no such object: {exc.args[0]}")
        except (OSError, ValueError) as exc:
            self._print(f"error: {exc}")
        return True

    def _dispatch(self, args: list[str]) -> None:
        action = self._arg(args, 1)
        if action == "init":
            self._init(self._arg(args, 2))
        elif action == "add":
            for path in self._repository().stage_all():
                self._print(f"ADDED:    {path}")
        elif action == "branch":
            self._repository().create_branch(self._arg(args, 2))
        elif action == "goto":
            target = self._arg(args, 2)
            if target == "new":
                self._repository().switch_to_new_branch(self._arg(args, 3))
            else:
                self._repository().switch_branch(target)
        elif action == "current":
            self._print(f"* {self._repository().head()}")
        elif action == "branches":
            current, *others = self._repository().branches()
            self._print(f"* {current}")
            for name in others:
                self._print(name)
        elif action == "delete":
            if self._arg(args, 2) == "-b":
                self._repository().delete_branch(self._arg(args, 3))
        elif action == "status":
            self._status()
        elif action == "commit":
            message = "".join(f"{word} " for word in args[2:])
            self._repository().commit(message)
        elif action == "cat-file":
            option = self._arg(args, 2)
            if option == "-t":
                self._print(self._repository().object_type(self._arg(args, 3)))
            elif option == "-p":
                self._print(self._repository().object_content(self._arg(args, 3)))
        elif action == "log":
            self._log()

    def _init(self, path: str) -> None:
        try:
            Repository.init(path)
        except RepositoryError as exc:
            self._print(str(exc))
        self.root = Path(path)

    def _status(self) -> None:
        report = self._repository().status()
        for path in report.deleted:
            self._print(f"DELETED: {path}")
        for path in report.modified:
            self._print(f"MODIFIED:    {path}")
        if report.clean:
            self._print("Nothing to commit, working tree clean.")

    def _log(self) -> None:
        for _digest, content in self._repository().log():
            self.out.write(_LOG_RULE)
            self._print(content)

    def run(self, lines: Iterable[str]) -> int:
        """Greet, then prompt for and execute lines until exit or end of input."""
        self.out.write(WELCOME)
        self.out.write(PROMPT)
        for line in lines:
            if not self.execute(line.rstrip("\r\n")):
                return 0
            self.out.write(PROMPT)
        return 0


def main(argv: list[str] | None = None) -> int:
    """Run one command given as arguments, or the interactive shell."""
    args = sys.argv[1:] if argv is None else list(argv)
    shell = Shell(sys.stdout)
    if args:
        if args[0] != "jit":
            args.insert(0, "jit")
        shell.execute(" ".join(args))
        return 0
    return shell.run(sys.stdin)


if __name__ == "__main__":
    raise SystemExit(main())