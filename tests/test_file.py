"""Tests for DiskFile content and lifecycle operations."""

from __future__ import annotations

import io
import logging
import os

import pytest
from conftest import T1, write_file

from disk_entities._config import DiskConfig
from disk_entities._errors import AlreadyExists, NotFound
from disk_entities._file import DiskFile

STRICT = DiskConfig(strict=True)


class TestDiskFileConstruction:
    def test_probes_existing_file(self, tree: str) -> None:
        f = DiskFile("a.txt", tree)
        assert f.size_in_bytes == 10
        assert f.last_modified == T1
        assert f.created is not None
        assert f.stats is not None
        assert f.content is None

    def test_absent_file(self, workdir: str) -> None:
        f = DiskFile("new", workdir, extension="txt")
        assert f.exists() is False
        assert f.size_in_bytes == 0
        assert f.last_modified is None
        assert f.stats is None

    def test_on_change_called(self, tree: str) -> None:
        seen: list[tuple[DiskFile, object]] = []
        f = DiskFile("a.txt", tree, on_change=lambda entity, params: seen.append((entity, params)), on_change_params=7)
        assert seen == [(f, 7)]

    def test_exists_true_for_directory(self, tree: str) -> None:
        assert DiskFile(file_path=os.path.join(tree, "sub")).exists() is True


class TestDiskFileRead:
    def test_read_small(self, tree: str) -> None:
        f = DiskFile("a.txt", tree)
        assert f.read() is f
        assert f.content == b"a" * 10

    def test_get_content(self, tree: str) -> None:
        assert DiskFile(file_path=os.path.join(tree, "sub", "b.txt")).get_content() == b"b" * 20

    def test_read_not_synced_after_construction(self, tree: str) -> None:
        f = DiskFile("a.txt", tree)
        write_file(f.full_path, b"changed")
        assert f.content is None
        assert f.read().content == b"changed"

    def test_read_large_as_stream(self, tree: str) -> None:
        f = DiskFile("a.txt", tree, config=DiskConfig(large_file_threshold=5))
        content = f.read().content
        assert isinstance(content, io.BufferedReader)
        try:
            assert content.read() == b"a" * 10
        finally:
            content.close()

    def test_read_again_closes_previous_stream(self, tree: str) -> None:
        f = DiskFile("a.txt", tree, config=DiskConfig(large_file_threshold=0))
        first = f.read().content
        second = f.read().content
        assert first is not second
        assert first.closed
        assert not second.closed
        f.close()
        assert second.closed

    def test_read_missing_is_notice(self, workdir: str, caplog: pytest.LogCaptureFixture) -> None:
        f = DiskFile("ghost.txt", workdir)
        with caplog.at_level(logging.WARNING, logger="disk_entities._folder"):
            f.read()
        assert f.content is None
        assert "ghost.txt" in caplog.text

    def test_read_missing_strict(self, workdir: str) -> None:
        with pytest.raises(NotFound):
            DiskFile("ghost.txt", workdir, config=STRICT).read()


class TestDiskFileSave:
    def test_save_creates_parents(self, workdir: str) -> None:
        f = DiskFile("n", os.path.join(workdir, "x", "y"), extension="txt", content="hello")
        assert f.save() is f
        with open(os.path.join(workdir, "x", "y", "n.txt"), "rb") as fh:
            assert fh.read() == b"hello"

    def test_save_then_probe_size(self, workdir: str) -> None:
        content = "grüße\n" * 3
        f = DiskFile("s.txt", workdir, content=content).save()
        fresh = DiskFile("s.txt", workdir)
        assert fresh.size_in_bytes == len(content.encode("utf-8"))
        assert f.size_in_bytes == fresh.size_in_bytes

    def test_save_overwrites(self, tree: str) -> None:
        f = DiskFile("a.txt", tree, content=b"xy").create()
        assert f.size_in_bytes == 2
        assert f.read().content == b"xy"

    def test_save_none_writes_empty(self, workdir: str) -> None:
        f = DiskFile("empty", workdir).save()
        assert f.exists()
        assert f.size_in_bytes == 0

    def test_save_stream(self, workdir: str) -> None:
        f = DiskFile("s.bin", workdir, content=io.BytesIO(b"from stream")).save()
        assert f.size_in_bytes == len(b"from stream")

    def test_save_as(self, tree: str) -> None:
        f = DiskFile("a.txt", tree).read()
        copy = f.save_as("sub/deeper/a2.txt")
        assert copy is not f
        assert copy.full_path == os.path.join(tree, "sub", "deeper", "a2.txt")
        assert copy.read().content == b"a" * 10


class TestDiskFileRename:
    def test_rename_keeps_extension(self, workdir: str) -> None:
        f = DiskFile("old", workdir, extension="md", content="x").save()
        f.rename("new")
        assert f.name == "new"
        assert os.path.isfile(os.path.join(workdir, "new.md"))
        assert not os.path.exists(os.path.join(workdir, "old.md"))

    def test_rename_missing_updates_name_only(self, workdir: str) -> None:
        f = DiskFile("old", workdir, extension="txt")
        old_path = f.full_path
        f.rename("new")
        assert f.name == "new"
        assert not os.path.exists(old_path)
        assert f.exists() is False

    def test_rename_missing_strict(self, workdir: str) -> None:
        with pytest.raises(NotFound):
            DiskFile("old", workdir, config=STRICT).rename("new")


class TestDiskFileDelete:
    def test_delete_resets_stats_keeps_content(self, tree: str) -> None:
        f = DiskFile("a.txt", tree).read()
        assert f.delete() is f
        assert not os.path.exists(os.path.join(tree, "a.txt"))
        assert f.size_in_bytes == 0
        assert f.last_modified is None
        assert f.created is None
        assert f.stats is None
        assert f.content == b"a" * 10

    def test_delete_then_save_restores(self, tree: str) -> None:
        f = DiskFile("a.txt", tree).read().delete()
        f.save()
        assert f.size_in_bytes == 10

    def test_delete_missing_is_notice(self, workdir: str, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="disk_entities._folder"):
            DiskFile("ghost", workdir).delete()
        assert "ghost" in caplog.text

    def test_delete_missing_strict(self, workdir: str) -> None:
        with pytest.raises(NotFound):
            DiskFile("ghost", workdir, config=STRICT).delete()


class TestDiskFileMoveCopy:
    def test_move_creates_target(self, tree: str) -> None:
        f = DiskFile("a.txt", tree)
        f.move_to("archive/2024")
        target = os.path.join(tree, "archive", "2024")
        assert f.folder_path == target
        assert f.full_path == os.path.join(target, "a.txt")
        assert os.path.isfile(f.full_path)
        assert not os.path.exists(os.path.join(tree, "a.txt"))

    def test_move_to_parent(self, tree: str) -> None:
        f = DiskFile(file_path=os.path.join(tree, "sub", "b.txt"))
        f.move_to("..")
        assert f.full_path == os.path.join(tree, "b.txt")
        assert os.path.isfile(f.full_path)

    def test_move_onto_folder_of_same_name_refused(self, tree: str, caplog: pytest.LogCaptureFixture) -> None:
        os.makedirs(os.path.join(tree, "dst", "a.txt"))
        f = DiskFile("a.txt", tree)
        with caplog.at_level(logging.WARNING, logger="disk_entities._folder"):
            f.move_to("dst")
        assert "already exists" in caplog.text
        assert f.full_path == os.path.join(tree, "a.txt")
        assert os.path.isfile(f.full_path)
        assert os.listdir(os.path.join(tree, "dst", "a.txt")) == []

    def test_move_onto_folder_of_same_name_strict(self, tree: str) -> None:
        os.makedirs(os.path.join(tree, "dst", "a.txt"))
        with pytest.raises(AlreadyExists):
            DiskFile("a.txt", tree, config=STRICT).move_to("dst")

    def test_move_missing(self, workdir: str) -> None:
        with pytest.raises(NotFound):
            DiskFile("ghost", workdir).move_to("else")

    def test_copy(self, tree: str) -> None:
        f = DiskFile("a.txt", tree)
        copy = f.copy_to("backup")
        assert copy is not f
        assert copy.full_path == os.path.join(tree, "backup", "a.txt")
        assert copy.size_in_bytes == 10
        assert os.path.isfile(f.full_path)

    def test_copy_missing(self, workdir: str) -> None:
        with pytest.raises(NotFound):
            DiskFile("ghost", workdir).copy_to("else")


class TestSearchAndReplace:
    def test_text_content(self, workdir: str) -> None:
        f = DiskFile("t", workdir, content="a-b-c")
        f.search_and_replace("-", "+")
        assert f.content == "a+b+c"
        assert f.size_in_bytes == 5

    def test_bytes_content_with_text_pattern(self, tree: str) -> None:
        f = DiskFile("a.txt", tree).read()
        f.search_and_replace(r"a{5}", "b")
        assert f.content == "bb"

    def test_bytes_pattern(self, workdir: str) -> None:
        f = DiskFile("t", workdir, content=b"\x00\x01\x00")
        f.search_and_replace(rb"\x00", b"\xff")
        assert f.content == b"\xff\x01\xff"

    def test_no_content(self, workdir: str) -> None:
        f = DiskFile("t", workdir)
        f.search_and_replace("x", "y")
        assert f.content is None
