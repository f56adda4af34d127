import os
from pathlib import Path

import typefinder as tf
from examples.json_cache import JsonFileCache

# Resolved paths are kept in a JSON file so the next run skips the walk.
# Override the path with TYPEFINDER_CACHE to keep test runs isolated.
cache_path = Path(os.environ.get("TYPEFINDER_CACHE", ".typefinder/cache.json"))
demo = Path(__file__).parent / "demo"

resolver = tf.Resolver(
    search_roots=[demo / "app", demo / "libs"],
    ignored_names=["trash"],
    cache=JsonFileCache(cache_path),
)


def greet(name: str) -> str:
    module = resolver.resolve("greetings.Greeter")
    return module.Greeter().hello(name)


if __name__ == "__main__":
    # run from the repository root: python -m examples.basic
    print(greet("world"))
    tf.print_report(resolver)
