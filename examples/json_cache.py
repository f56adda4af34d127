import json
from collections.abc import Mapping
from pathlib import Path


class JsonFileCache:
    """
    Keep a resolver's name -> path table in a JSON file between runs.

    Satisfies `typefinder.ResolverCache`: `load()` returns the stored table (or
    None when nothing was written yet), `cache(data)` rewrites the file.
    """

    def __init__(self, path: str | Path = ".typefinder/cache.json"):
        self.path = Path(path)

    def load(self) -> dict[str, str] | None:
        if not self.path.exists():
            return None
        return json.loads(self.path.read_text(encoding="utf-8"))

    def cache(self, data: Mapping[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(dict(data), ensure_ascii=False, indent=2, sort_keys=True)
        self.path.write_text(line + "\n", encoding="utf-8")
