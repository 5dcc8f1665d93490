"""A small repository: staging index, branches, trees and commits."""

from __future__ import annotations

import getpass
import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterator

from jitvcs.objects import ObjectStore, encode_object, object_hash

JIT_DIR = ".jit"
_IGNORED = frozenset({JIT_DIR, "a.exe"})
_HEAD_PREFIX = "ref: refs/branches/"
_TIME_FORMAT = "%d-%m-%Y, %H:%M:%S"


class RepositoryError(Exception):
    """Raised when a repository operation cannot be carried out."""


class BranchError(RepositoryError):
    """Raised for invalid branch operations."""


@dataclass
class StatusReport:
    """Working tree changes relative to the staging index."""

    deleted: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not (self.deleted or self.modified)


def _default_author() -> str:
    try:
        return getpass.getuser()
    except Exception:
        return "unknown"


def _validate_branch_name(name: str) -> None:
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise BranchError(f"invalid branch name: {name!r}")


class Repository:
    """A working directory with a ``.jit`` metadata directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.jit_dir = self.root / JIT_DIR
        if not self.jit_dir.is_dir():
            raise RepositoryError(f"not a jit repository: {self.root}")
        self.objects = ObjectStore(self.jit_dir / "objects")
        self.author = _default_author()
        self.clock = datetime.now

    @classmethod
    def init(cls, path: str | Path) -> "Repository":
        root = Path(path)
        jit_dir = root / JIT_DIR
        if jit_dir.exists():
            raise RepositoryError("Working repository already initialized.")
        (jit_dir / "objects").mkdir(parents=True)
        branches = jit_dir / "refs" / "branches"
        branches.mkdir(parents=True)
        (branches / "master").write_text("", encoding="utf-8")
        (jit_dir / "index.json").write_text(
            json.dumps({"master": {}}, indent=4, sort_keys=True), encoding="utf-8"
        )
        (jit_dir / "head").write_text(_HEAD_PREFIX + "master\n", encoding="utf-8")
        return cls(root)

    @property
    def _branches_dir(self) -> Path:
        return self.jit_dir / "refs" / "branches"

    @property
    def _index_path(self) -> Path:
        return self.jit_dir / "index.json"

    def _load_index(self) -> dict:
        try:
            return json.loads(self._index_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}

    def _save_index(self, index: dict) -> None:
        self._index_path.write_text(
            json.dumps(index, indent=4, sort_keys=True), encoding="utf-8"
        )

    def _branch_tip(self, branch: str) -> str:
        ref = self._branches_dir / branch
        if not ref.is_file():
            return ""
        tokens = ref.read_text(encoding="utf-8").split()
        return tokens[0] if tokens else ""

    def _files(self, directory: Path) -> Iterator[Path]:
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.name in _IGNORED:
                continue
            if entry.is_dir():
                yield from self._files(entry)
            else:
                yield entry

    def _key(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def _stage_file(self, index: dict, branch: str, path: Path) -> tuple[str, bool]:
        content = path.read_bytes()
        digest = object_hash(encode_object("blob", content))
        entries = index.setdefault(branch, {})
        key = self._key(path)
        if entries.get(key) == digest:
            return digest, False
        self.objects.write("blob", content)
        entries[key] = digest
        return digest, True

    def head(self) -> str:
        """Name of the branch HEAD points to."""
        text = (self.jit_dir / "head").read_text(encoding="utf-8")
        return text[text.rfind("/") + 1:].rstrip(" \n\r\t")

    def stage_all(self) -> list[str]:
        """Stage every changed file; return the paths that were added."""
        index = self._load_index()
        branch = self.head()
        added = [
            self._key(path)
            for path in self._files(self.root)
            if self._stage_file(index, branch, path)[1]
        ]
        self._save_index(index)
        return added

    def status(self) -> StatusReport:
        """Report deleted and modified files; drop deleted ones from the index."""
        index = self._load_index()
        entries = index.setdefault(self.head(), {})
        staged = dict(entries)
        report = StatusReport()
        for key in staged:
            if not (self.root / key).exists():
                report.deleted.append(key)
                del entries[key]
        for path in self._files(self.root):
            key = self._key(path)
            known = staged.get(key)
            if known is None or object_hash(encode_object("blob", path.read_bytes())) != known:
                report.modified.append(key)
        self._save_index(index)
        return report

    def create_branch(self, name: str) -> None:
        """Create a branch pointing at the current branch's commit."""
        _validate_branch_name(name)
        current = self._branches_dir / self.head()
        tip = current.read_text(encoding="utf-8") if current.is_file() else ""
        (self._branches_dir / name).write_text(tip, encoding="utf-8")
        index = self._load_index()
        index[name] = {}
        self._save_index(index)

    def switch_branch(self, name: str) -> None:
        _validate_branch_name(name)
        (self.jit_dir / "head").write_text(_HEAD_PREFIX + name, encoding="utf-8")

    def switch_to_new_branch(self, name: str) -> None:
        self.create_branch(name)
        self.switch_branch(name)

    def branches(self) -> list[str]:
        """Branch names, the current one first and the rest sorted."""
        current = self.head()
        others = sorted(
            entry.name for entry in self._branches_dir.iterdir() if entry.name != current
        )
        return [current, *others]

    def delete_branch(self, name: str) -> None:
        _validate_branch_name(name)
        if name == self.head():
            raise BranchError("Cannot delete a branch HEAD is pointing to.")
        ref = self._branches_dir / name
        missing = not ref.is_file()
        if not missing:
            ref.unlink()
        index = self._load_index()
        index.pop(name, None)
        self._save_index(index)
        if missing:
            raise BranchError("file deletion unsuccessful.")

    def _build_tree(self, directory: Path, index: dict, branch: str) -> str:
        lines = []
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.name in _IGNORED:
                continue
            if entry.is_dir():
                digest = self._build_tree(entry, index, branch)
                lines.append(f"tree\t\t{digest}\t\t{entry.name}\n")
            else:
                digest, _ = self._stage_file(index, branch, entry)
                lines.append(f"blob\t\t{digest}\t\t{entry.name}\n")
        return self.objects.write("tree", "".join(lines).encode("utf-8"))

    def write_tree(self, directory: str | Path = ".") -> str:
        """Store blobs and trees for ``directory``; return the tree hash.

        The staging index is consulted but not saved.
        """
        target = self.root / directory
        return self._build_tree(target, self._load_index(), self.head())

    def commit(self, message: str) -> str:
        """Record the working tree as a commit on the current branch."""
        tree = self.write_tree(".")
        branch = self.head()
        parent = self._branch_tip(branch)
        body = f"\ntree\t\t{tree}\n"
        if parent:
            body += f"parent\t\t{parent}\n"
        body += f"author\t\t{self.author}\n"
        body += f"time\t\t{self.clock().strftime(_TIME_FORMAT)}\n"
        body += f"\n{message}\n"
        digest = self.objects.write("commit", body.encode("utf-8"))
        (self._branches_dir / branch).write_text(digest, encoding="utf-8")
        return digest

    def log(self) -> list[tuple[str, str]]:
        """Commits of the current branch, newest first, as (hash, content)."""
        current = self._branch_tip(self.head())
        if not current:
            raise RepositoryError("your current branch does not have any commits yet.")
        history = []
        while current:
            text = self.objects.read(current).text
            history.append((current, text))
            parent = ""
            for line in text.splitlines():
                if line.startswith("parent\t\t"):
                    parent = line[len("parent\t\t"):].strip()
                    break
                if line.startswith("time\t\t"):
                    break
            current = parent
        return history

    def object_type(self, digest: str) -> str:
        return self.objects.read(digest).kind

    def object_content(self, digest: str) -> str:
        return self.objects.read(digest).text