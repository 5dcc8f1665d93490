# jitvcs

Jit is a small version control system. It is similar to Git, yet a bit
different. It stores file contents, directory trees and commits as
zlib-compressed objects under a `.jit` directory. Objects are named by the
64-bit FNV-1a hash of their stored form, written as a decimal number. It keeps
a staging index for each branch in `.jit/index.json`. It also comes with an
interactive shell.

## Installation

```
pip install .
```

## The command line

Run `jit` with no arguments to start the interactive shell. The shell prints a
`jit > ` prompt and reads one command per line. Type `help` to list the
commands. Type `exit` or `quit` to leave, or end the input.

```
jit > jit init .
jit > jit add .
jit > jit commit first snapshot
jit > jit log
jit > jit branch feature
jit > jit goto feature
jit > jit branches
jit > jit current
jit > jit status
jit > jit cat-file -t <hash>
jit > jit cat-file -p <hash>
jit > jit delete -b feature
jit > jit goto new experiment
```

You can also run a single command straight from your shell. The leading `jit`
word may be left out:

```
jit init .
jit add
jit commit first snapshot
```

What the commands do:

- `jit init <path>` creates `<path>/.jit` with an empty `master` branch. Later
  commands in the same shell session act on that path.
- `jit add` stages every changed file in the working tree and prints
  `ADDED:    <path>` for each one. Any arguments after `add` are ignored.
- `jit commit <message>` stores blobs and trees for the whole working tree and
  records a commit on the current branch.
- `jit log` prints the commits of the current branch, newest first.
- `jit status` lists files that were deleted or modified since they were
  staged. Deleted files are dropped from the staging index.
- `jit branch <name>` creates a branch at the current branch's commit.
- `jit goto <name>` points HEAD at a branch; `jit goto new <name>` creates the
  branch first.
- `jit current` and `jit branches` show the current branch and all branches.
- `jit delete -b <name>` deletes a branch other than the current one.
- `jit cat-file -t <hash>` and `jit cat-file -p <hash>` print an object's type
  or its content.

Until `jit init` has been run in a shell session, the commands act on the
current working directory, which must then be the root of a repository. The
files `.jit` and `a.exe` are never tracked.

## Using the library

```python
from jitvcs.repository import Repository

repo = Repository.init("project")
added = repo.stage_all()             # paths that were staged
digest = repo.commit("first snapshot")
print(repo.object_type(digest))      # "commit"
print(repo.object_content(digest))

repo.create_branch("feature")
repo.switch_branch("feature")
print(repo.head())                   # "feature"
print(repo.branches())               # current branch first, others sorted

for commit_hash, content in repo.log():
    print(commit_hash)

report = repo.status()
print(report.deleted, report.modified, report.clean)
```

`Repository(root)` opens an existing repository. Failures raise
`RepositoryError`; invalid branch operations raise its subclass `BranchError`.
Reading an object that does not exist raises `KeyError`.

Objects can also be handled directly through `jitvcs.objects.ObjectStore`,
whose `write`, `read`, `exists` and `path_for` methods work on a directory of
objects. The helpers `compress`, `decompress`, `object_hash` and
`encode_object` come from the same module.

## What it does not do

- `goto` only moves HEAD; it does not change the files in the working tree.
- There is no reset, merge or clone, and no way to restore files from a commit.
- `add` always stages the whole working tree; it cannot stage single files.

## Running the tests

```
pip install .[test]
pytest
```