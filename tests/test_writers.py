"""
Tests for codegen/writers.py
"""

import io

import pytest
from rich.console import Console

from beanerator.codegen.core.generator import EmissionError
from beanerator.codegen.writers import ConsoleWriter, FileWriter, MemoryWriter


def test_file_writer_follows_package_layout(tmp_path):
    writer = FileWriter(tmp_path, file_name=lambda name: f"{name}.java")
    writer.emit("red.enspi.demo", "CoffeeBean", "final class CoffeeBean {}\n")

    path = tmp_path / "red" / "enspi" / "demo" / "CoffeeBean.java"
    assert path.read_text(encoding="utf-8") == "final class CoffeeBean {}\n"
    assert writer.written == [path]
    assert [p.name for p in path.parent.iterdir()] == ["CoffeeBean.java"]


def test_file_writer_without_package(tmp_path):
    writer = FileWriter(tmp_path)
    writer.emit("", "PointBean", "x = 1\n")
    assert (tmp_path / "PointBean.py").read_text(encoding="utf-8") == "x = 1\n"


def test_file_writer_keeps_line_endings(tmp_path):
    writer = FileWriter(tmp_path)
    writer.emit("", "PointBean", "a\r\nb\r\n")
    assert (tmp_path / "PointBean.py").read_bytes() == b"a\r\nb\r\n"


def test_file_writer_overwrites_files_from_earlier_runs(tmp_path):
    FileWriter(tmp_path).emit("", "PointBean", "old\n")
    FileWriter(tmp_path).emit("", "PointBean", "new\n")
    assert (tmp_path / "PointBean.py").read_text(encoding="utf-8") == "new\n"


def test_file_writer_rejects_a_path_written_in_this_pass(tmp_path):
    writer = FileWriter(tmp_path)
    writer.emit("shop", "ItemBean", "first\n")

    with pytest.raises(EmissionError, match="already written in this pass"):
        writer.emit("shop", "ItemBean", "second\n")
    assert (tmp_path / "shop" / "ItemBean.py").read_text(encoding="utf-8") == "first\n"
    assert writer.written == [tmp_path / "shop" / "ItemBean.py"]


def test_file_writer_failure_raises_emission_error(tmp_path):
    blocker = tmp_path / "shop"
    blocker.write_text("not a directory", encoding="utf-8")

    writer = FileWriter(tmp_path)
    with pytest.raises(EmissionError):
        writer.emit("shop", "ItemBean", "x = 1\n")
    assert writer.written == []


def test_memory_writer_rejects_duplicates():
    writer = MemoryWriter()
    writer.emit("shop", "ItemBean", "one")

    with pytest.raises(EmissionError, match="already emitted"):
        writer.emit("shop", "ItemBean", "two")
    assert writer.get("ItemBean") == "one"


def test_memory_writer_lookup():
    writer = MemoryWriter()
    writer.emit("a", "ItemBean", "from a")
    writer.emit("b", "ItemBean", "from b")

    assert writer.get("ItemBean", "b") == "from b"
    with pytest.raises(KeyError):
        writer.get("OtherBean")


def test_console_writer_prints_source():
    buffer = io.StringIO()
    writer = ConsoleWriter(Console(file=buffer, width=100), lexer="python")
    writer.emit("shop", "ItemBean", "class ItemBean:\n    pass\n")

    output = buffer.getvalue()
    assert "shop.ItemBean" in output
    assert "class ItemBean:" in output
