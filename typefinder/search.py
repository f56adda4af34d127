import os
from collections.abc import Collection
from pathlib import Path

from .core import SOURCE_EXTENSION


class DirectorySearch:
    """
    Find a file by its extension-less basename under a single root.

    - Entries are visited in listing order; a subdirectory is walked as soon as
      it is met, before its later siblings.
    - Directories named in `ignored_names` are never entered, at any depth.
    - Only files whose extension is in `accepted_extensions` can match.
    - Real paths of entered directories are remembered so symlink loops end.
    """

    def __init__(
        self,
        ignored_names: Collection[str] = (),
        accepted_extensions: Collection[str] = (SOURCE_EXTENSION,),
        max_depth: int | None = None,
    ):
        self.ignored_names = ignored_names
        self.accepted_extensions = accepted_extensions
        self.max_depth = max_depth
        self.listings = 0

    def find(self, target: str, root: str | Path) -> str | None:
        entries = self._list(str(root))
        if entries is None:
            return None

        visited = {os.path.realpath(root)}
        stack = [(iter(entries), 0)]
        while stack:
            pending, depth = stack[-1]
            entry = next(pending, None)
            if entry is None:
                stack.pop()
                continue
            if entry.name in (".", ".."):
                continue

            if self._is_dir(entry):
                if entry.name in self.ignored_names:
                    continue
                if self.max_depth is not None and depth >= self.max_depth:
                    continue
                real = os.path.realpath(entry.path)
                if real in visited:
                    continue
                children = self._list(entry.path)
                if children is None:
                    continue
                visited.add(real)
                stack.append((iter(children), depth + 1))
                continue

            if self._matches(entry, target):
                return entry.path

        return None

    # ---------- helpers ----------
    def _list(self, path: str) -> list[os.DirEntry] | None:
        try:
            with os.scandir(path) as it:
                entries = list(it)
        except OSError:
            return None
        self.listings += 1
        return entries

    def _is_dir(self, entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir()
        except OSError:
            return False

    def _matches(self, entry: os.DirEntry, target: str) -> bool:
        try:
            if not entry.is_file():
                return False
        except OSError:
            return False
        stem, ext = os.path.splitext(entry.name)
        ext = ext[1:]
        if not ext or ext not in self.accepted_extensions:
            return False
        return stem == target
