import pytest

from file_service.errors import StorageError
from file_service.storage import LocalFileStorage


@pytest.mark.asyncio
async def test_put_writes_bytes_with_extension(tmp_path):
    storage = LocalFileStorage(str(tmp_path))
    name = await storage.put(b"payload", "svg")

    assert name.endswith(".svg")
    assert (tmp_path / name).read_bytes() == b"payload"


@pytest.mark.asyncio
async def test_put_with_empty_extension_keeps_trailing_dot(tmp_path):
    storage = LocalFileStorage(str(tmp_path))
    name = await storage.put(b"", "")

    assert name.endswith(".")
    assert (tmp_path / name).exists()


@pytest.mark.asyncio
async def test_put_into_missing_directory_raises(tmp_path):
    storage = LocalFileStorage(str(tmp_path / "absent"))
    with pytest.raises(StorageError):
        await storage.put(b"data", "bin")


@pytest.mark.asyncio
async def test_list_names_returns_directory_entries(tmp_path):
    storage = LocalFileStorage(str(tmp_path))
    first = await storage.put(b"1", "png")
    second = await storage.put(b"2", "gif")

    assert sorted(await storage.list_names()) == sorted([first, second])


@pytest.mark.asyncio
async def test_list_names_missing_directory_raises(tmp_path):
    storage = LocalFileStorage(str(tmp_path / "absent"))
    with pytest.raises(StorageError):
        await storage.list_names()


@pytest.mark.asyncio
async def test_delete_existing_then_absent(tmp_path):
    storage = LocalFileStorage(str(tmp_path))
    name = await storage.put(b"gone soon", "pdf")

    assert await storage.delete(name) is True
    assert not (tmp_path / name).exists()
    assert await storage.delete(name) is False


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", ".", "..", "nested/name.png"])
async def test_delete_rejects_non_plain_names(tmp_path, name):
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "name.png").write_bytes(b"keep")
    storage = LocalFileStorage(str(tmp_path / "nested"))

    assert await storage.delete(name) is False
    assert (tmp_path / "nested" / "name.png").exists()


def test_exists_reflects_directory_presence(tmp_path):
    assert LocalFileStorage(str(tmp_path)).exists()
    assert not LocalFileStorage(str(tmp_path / "absent")).exists()
