"""Selection of the files in a directory that describe its public surface."""

from __future__ import annotations

import os

GO_SUFFIX = ".go"
FUZZ_FILENAME = "fuzz.go"
TEST_SUFFIX = "_test.go"
EXAMPLE_PREFIX = "example_"


def is_go_file(name: str, is_dir: bool = False) -> bool:
    """Return ``True`` if the directory entry ``name`` should be parsed.

    Test files, fuzz harnesses and examples often export helpers that
    are not part of the package API, so they are left out.
    """
    if is_dir:
        return False
    if name == FUZZ_FILENAME:
        return False
    if name.endswith(TEST_SUFFIX):
        return False
    if name.startswith(EXAMPLE_PREFIX):
        return False
    return True


def list_go_files(directory: str) -> list[str]:
    """Return the sorted paths of the parseable ``.go`` files in ``directory``.

    Raises:
        OSError: If ``directory`` cannot be listed.
    """
    paths = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if not entry.name.endswith(GO_SUFFIX):
                continue
            if is_go_file(entry.name, entry.is_dir()):
                paths.append(entry.path)
    return sorted(paths)
