from rich.console import Console

import typefinder as tf


def test_print_report_renders_memo_and_trace(tmp_path):
    (tmp_path / "Foo.py").write_text("")
    resolver = tf.Resolver(search_roots=[tmp_path])
    resolver.find_path("pkg.Foo")
    resolver.find_path("pkg.Missing")
    console = Console(record=True, width=240)

    summary = tf.print_report(resolver, console=console)
    text = console.export_text()

    assert "pkg.Foo" in text
    assert "Resolved types (1)" in text
    assert "Resolver trace (2 events)" in text
    assert summary["search"]["hits"] == 1
    assert summary["search"]["misses"] == 1


def test_memo_table_is_sorted():
    resolver = tf.Resolver()
    resolver.memo.update({"b.B": "/b.py", "a.A": "/a.py"})

    table = tf.memo_table(resolver)

    assert table.row_count == 2
    assert list(table.columns[0].cells) == ["a.A", "b.B"]
