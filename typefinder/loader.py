"""Loading resolved files and plugging the resolver into the import system."""
from __future__ import annotations

import importlib.util
import sys
from collections.abc import Callable
from importlib.abc import MetaPathFinder
from importlib.machinery import ModuleSpec, SourceFileLoader
from types import ModuleType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .resolver import Resolver


def load_source(name: str, path: str) -> ModuleType:
    """Execute the file at `path` as module `name` and register it in sys.modules.

    Only the name and path are passed in, so code in the loaded file cannot
    reach the resolver that located it.
    """
    # explicit loader: accepted extensions are not limited to ".py"
    spec = importlib.util.spec_from_file_location(
        name, path, loader=SourceFileLoader(name, path)
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load {name!r} from {path}", name=name, path=path)

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(name, None)
        raise
    return module


class NotifyingLoader(SourceFileLoader):
    """SourceFileLoader that calls `on_loaded()` once the module body ran.

    The executed module only ever sees a plain SourceFileLoader.
    """

    def __init__(self, fullname: str, path: str, on_loaded: Callable[[], None]):
        super().__init__(fullname, path)
        self.on_loaded = on_loaded

    def exec_module(self, module: ModuleType) -> None:
        plain = SourceFileLoader(self.name, self.path)
        module.__loader__ = plain
        if module.__spec__ is not None:
            module.__spec__.loader = plain
        super().exec_module(module)
        self.on_loaded()


class ResolverHook(MetaPathFinder):
    """One entry of a resolver in a finder chain such as `sys.meta_path`.

    Returns None for names the resolver cannot place so the import system can
    ask the next finder.
    """

    def __init__(self, resolver: Resolver):
        self.resolver = resolver

    def find_spec(self, fullname, path=None, target=None) -> ModuleSpec | None:
        file = self.resolver.find_path(fullname)
        if file is None:
            return None
        loader = NotifyingLoader(fullname, file, self.resolver.persist)
        return importlib.util.spec_from_file_location(fullname, file, loader=loader)

    def __repr__(self) -> str:
        return f"ResolverHook(roots={self.resolver.search_roots!r})"
