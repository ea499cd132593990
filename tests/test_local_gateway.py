import os
import threading
from pathlib import Path

import pytest

from burrow.core.errors import NotFound, TransportFailure
from burrow.core.fs_controller import FileSystemController
from burrow.gateway import LocalFilesystemGateway


@pytest.fixture
def gateway():
    return LocalFilesystemGateway(timeout=5.0)


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    (tmp_path / "alpha.txt").write_text("alpha", encoding="utf-8")
    (tmp_path / "Beta.log").write_text("beta-beta", encoding="utf-8")
    (tmp_path / ".hidden").write_text("secret", encoding="utf-8")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "inner.bin").write_bytes(b"\x00" * 32)
    return tmp_path


@pytest.mark.asyncio
async def test_list_directory_skips_hidden_entries(gateway, tree):
    response = await gateway.list_directory(str(tree))

    names = sorted(entry.name for entry in response.entries)
    assert names == ["Beta.log", "alpha.txt", "nested"]
    assert response.total_files == 2
    assert response.total_folders == 1
    assert response.total_size == len("alpha") + len("beta-beta")
    assert all(os.path.isabs(entry.path) for entry in response.entries)


@pytest.mark.asyncio
async def test_list_directory_filters_by_query(gateway, tree):
    response = await gateway.list_directory(str(tree), "BETA")
    assert [entry.name for entry in response.entries] == ["Beta.log"]


@pytest.mark.asyncio
async def test_missing_directory_is_not_found(gateway, tmp_path):
    with pytest.raises(NotFound):
        await gateway.list_directory(str(tmp_path / "absent"))


@pytest.mark.asyncio
async def test_rename_entry(gateway, tree):
    await gateway.rename_entry(str(tree / "alpha.txt"), "omega.txt")
    assert (tree / "omega.txt").read_text(encoding="utf-8") == "alpha"
    assert not (tree / "alpha.txt").exists()


@pytest.mark.asyncio
async def test_rename_onto_existing_name_fails(gateway, tree):
    with pytest.raises(TransportFailure) as excinfo:
        await gateway.rename_entry(str(tree / "alpha.txt"), "Beta.log")
    assert excinfo.value.code == "io_error"


@pytest.mark.asyncio
async def test_paste_file_into_directory(gateway, tree):
    await gateway.paste_entry(str(tree / "alpha.txt"), str(tree / "nested"))
    assert (tree / "nested" / "alpha.txt").read_text(encoding="utf-8") == "alpha"
    assert (tree / "alpha.txt").exists()


@pytest.mark.asyncio
async def test_paste_directory_copies_tree(gateway, tree, tmp_path_factory):
    destination = tmp_path_factory.mktemp("dest")
    await gateway.paste_entry(str(tree / "nested"), str(destination))
    assert (destination / "nested" / "inner.bin").stat().st_size == 32


@pytest.mark.asyncio
async def test_paste_onto_itself_fails(gateway, tree):
    with pytest.raises(TransportFailure):
        await gateway.paste_entry(str(tree / "alpha.txt"), str(tree))


@pytest.mark.asyncio
async def test_delete_file_and_directory(gateway, tree):
    await gateway.delete_entry(str(tree / "alpha.txt"))
    await gateway.delete_entry(str(tree / "nested"))
    assert not (tree / "alpha.txt").exists()
    assert not (tree / "nested").exists()


@pytest.mark.asyncio
async def test_delete_missing_entry_is_not_found(gateway, tree):
    with pytest.raises(NotFound):
        await gateway.delete_entry(str(tree / "ghost.txt"))


@pytest.mark.asyncio
async def test_autocomplete_returns_matching_siblings(gateway, tree):
    (tree / "alphabet").mkdir()
    suggestions = await gateway.autocomplete_path(str(tree / "alph"))
    assert suggestions == [str(tree / "alpha.txt"), str(tree / "alphabet")]


@pytest.mark.asyncio
async def test_autocomplete_in_missing_directory_is_empty(gateway, tmp_path):
    assert await gateway.autocomplete_path(str(tmp_path / "nope" / "x")) == []


@pytest.mark.asyncio
async def test_read_text_and_binary(gateway, tree):
    assert await gateway.read_text(str(tree / "alpha.txt")) == "alpha"
    assert await gateway.read_binary(str(tree / "nested" / "inner.bin")) == b"\x00" * 32


@pytest.mark.asyncio
async def test_directory_size_sums_nested_files(gateway, tree):
    size = await gateway.directory_size(str(tree))
    assert size == len("alpha") + len("beta-beta") + len("secret") + 32


@pytest.mark.asyncio
async def test_home_directory(gateway):
    assert await gateway.home_directory() == str(Path.home())


class BlockingController(FileSystemController):
    def __init__(self) -> None:
        self.release = threading.Event()

    def delete_path(self, target: Path) -> None:
        self.release.wait(timeout=5)


@pytest.mark.asyncio
async def test_slow_calls_time_out(tmp_path):
    controller = BlockingController()
    gateway = LocalFilesystemGateway(timeout=0.05, fs_controller=controller)
    try:
        with pytest.raises(TransportFailure) as excinfo:
            await gateway.delete_entry(str(tmp_path / "anything"))
    finally:
        controller.release.set()
    assert excinfo.value.code == "timeout"
