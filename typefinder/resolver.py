import os
import sys
from collections import deque
from collections.abc import Iterable, Mapping, MutableSequence
from pathlib import Path
from types import ModuleType
from typing import Any

from .core import (
    SEPARATOR,
    SOURCE_EXTENSION,
    ConfigurationError,
    ResolverCache,
    TraceEvent,
    normalize_extension,
    normalize_name,
    target_of,
)
from .loader import ResolverHook, load_source
from .search import DirectorySearch
from .utils import timer


class Resolver:
    """
    Map fully-qualified type names to the files that define them.

    Lookup order for `find_path`:
      1) memo table (no disk check, a stale path is returned as-is)
      2) direct probe of the name as an absolute `.py` path
      3) depth-first walk of every search root, in the order they were added

    With a cache collaborator set, its `load()` result seeds the memo and its
    `cache(memo)` receives the whole memo after every successful load.
    Only the newest `trace_limit` trace events are kept (None keeps them all).

    Usage:
        resolver = (
            Resolver()
            .add_search_root("app")
            .add_search_root("libs")
            .add_ignored_name("trash")
            .register()
        )
    """

    def __init__(
        self,
        search_roots: Iterable[str | Path] = (),
        ignored_names: Iterable[str] = (),
        accepted_extensions: Iterable[str] = (SOURCE_EXTENSION,),
        cache: ResolverCache | None = None,
        load_cache: bool = True,
        max_depth: int | None = None,
        trace_limit: int | None = 1000,
    ):
        self.search_roots: list[str] = []
        self.ignored_names: set[str] = set()
        self.accepted_extensions: set[str] = set()
        self.memo: dict[str, str] = {}
        self.cache: ResolverCache | None = None
        self.max_depth = max_depth
        self.trace: deque[TraceEvent] = deque(maxlen=trace_limit)
        self._hooks: list[tuple[ResolverHook, MutableSequence]] = []

        self.add_search_roots(search_roots)
        self.add_ignored_names(ignored_names)
        self.add_extensions(accepted_extensions)
        if cache is not None:
            self.set_cache(cache, load_on_set=load_cache)

    # ---------- configuration ----------
    def add_search_root(self, path: str | Path) -> "Resolver":
        self.search_roots.append(os.fspath(path))
        return self

    def add_search_roots(self, paths: Iterable[str | Path]) -> "Resolver":
        for path in paths:
            self.add_search_root(path)
        return self

    def add_ignored_name(self, name: str) -> "Resolver":
        self.ignored_names.add(name)
        return self

    def add_ignored_names(self, names: Iterable[str]) -> "Resolver":
        for name in names:
            self.add_ignored_name(name)
        return self

    def add_extension(self, ext: str) -> "Resolver":
        self.accepted_extensions.add(normalize_extension(ext))
        return self

    def add_extensions(self, exts: Iterable[str]) -> "Resolver":
        for ext in exts:
            self.add_extension(ext)
        return self

    def set_cache(self, cache: ResolverCache, load_on_set: bool = True) -> "Resolver":
        if cache is None:
            raise ConfigurationError("Cache must be an object")
        if not isinstance(cache, ResolverCache) or not (
            callable(getattr(cache, "load", None))
            and callable(getattr(cache, "cache", None))
        ):
            raise ConfigurationError(
                'Cache object must implement methods "load()" and "cache(data)"'
            )

        self.cache = cache
        if load_on_set:
            entries = _entries_of(cache.load())
            if entries is not None:
                self.memo.update(
                    {normalize_name(str(k)): str(v) for k, v in entries.items()}
                )
            self.log(
                "cache_load",
                merged=0 if entries is None else len(entries),
                entries=len(self.memo),
            )
        return self

    # ---------- import system ----------
    @property
    def is_registered(self) -> bool:
        return bool(self._hooks)

    def register(
        self, prepend: bool = False, chain: MutableSequence | None = None
    ) -> "Resolver":
        chain = sys.meta_path if chain is None else chain
        hook = ResolverHook(self)
        if prepend:
            chain.insert(0, hook)
        else:
            chain.append(hook)
        self._hooks.append((hook, chain))
        self.log("register", prepend=prepend, entries=len(self._hooks))
        return self

    def unregister(self, chain: MutableSequence | None = None) -> int:
        """Remove the most recently installed hook entry; return how many went."""
        for i in range(len(self._hooks) - 1, -1, -1):
            hook, installed = self._hooks[i]
            if chain is not None and installed is not chain:
                continue
            del self._hooks[i]
            if any(entry is hook for entry in installed):
                installed.remove(hook)
                self.log("unregister", entries=len(self._hooks))
                return 1
        return 0

    # ---------- resolution ----------
    def resolve(self, type_name: str) -> ModuleType | None:
        name = normalize_name(type_name)
        path = self.find_path(type_name)
        if path is None:
            self.log("resolve", name=name, loaded=False)
            return None

        module = load_source(name, path)
        self.log("resolve", name=name, loaded=True, path=path)
        self.persist()
        return module

    def find_path(self, type_name: str) -> str | None:
        name = normalize_name(type_name)
        if name in self.memo:
            self.log("memo", name=name, path=self.memo[name])
            return self.memo[name]

        # legacy: the name itself as a path, never joined with a search root
        probe = os.sep + name.replace(SEPARATOR, os.sep) + "." + SOURCE_EXTENSION
        if os.path.isfile(probe):
            self.memo[name] = probe
            self.log("probe", name=name, path=probe)
            return probe

        target = target_of(name)
        search = DirectorySearch(
            self.ignored_names, self.accepted_extensions, self.max_depth
        )
        found = None
        with timer() as elapsed:
            for root in self.search_roots:
                found = search.find(target, root)
                if found is not None:
                    self.memo[name] = found
                    break
        self.log(
            "search",
            name=name,
            target=target,
            hit=found is not None,
            path=found,
            roots=len(self.search_roots),
            listings=search.listings,
            seconds=elapsed(),
        )
        return found

    def persist(self) -> None:
        if self.cache is None:
            return
        self.cache.cache(dict(self.memo))
        self.log("cache_store", entries=len(self.memo))

    # ---------- trace ----------
    def log(self, op, **payload):
        self.trace.append(TraceEvent(op, payload))

    def explain_trace(self):
        for ev in self.trace:
            print(ev.op, ev.payload)

    def clear_trace(self):
        self.trace.clear()

    def __repr__(self) -> str:
        return (
            f"Resolver(roots={self.search_roots!r}, ignored={sorted(self.ignored_names)!r}, "
            f"extensions={sorted(self.accepted_extensions)!r}, memo={len(self.memo)})"
        )


def _entries_of(loaded: Any) -> Mapping | None:
    if isinstance(loaded, Mapping):
        return loaded
    if loaded is not None and hasattr(loaded, "__dict__"):
        return vars(loaded)
    return None
