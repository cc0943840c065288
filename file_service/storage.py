import os
from pathlib import Path
from uuid import uuid4

import aiofiles
import aiofiles.os

from file_service.errors import StorageError
from file_service.logging_config import setup_logger

logger = setup_logger()


class LocalFileStorage:
    """Flat directory of opaque files named by the server."""

    def __init__(self, root_dir: str):
        self.root = Path(root_dir)

    def exists(self) -> bool:
        return self.root.is_dir()

    def _path_for(self, name: str) -> Path | None:
        if not name or name in {".", ".."} or "/" in name or os.sep in name:
            return None
        return self.root / name

    async def put(self, data: bytes, extension: str) -> str:
        # An empty extension still leaves the trailing dot
        name = f"{uuid4()}.{extension}"
        target = self.root / name
        try:
            async with aiofiles.open(target, "wb") as f:
                await f.write(data)
        except OSError as exc:
            logger.error("error writing file %s: %s", target, exc)
            raise StorageError(f"could not write {name}") from exc
        logger.info("created file: %s", target)
        return name

    async def list_names(self) -> list[str]:
        try:
            entries = await aiofiles.os.listdir(self.root)
        except OSError as exc:
            logger.error("error reading storage directory %s: %s", self.root, exc)
            raise StorageError(f"could not list {self.root}") from exc

        names = []
        for entry in entries:
            try:
                entry.encode("utf-8")
            except UnicodeEncodeError:
                continue
            names.append(entry)
        return names

    async def delete(self, name: str) -> bool:
        target = self._path_for(name)
        logger.info("Deleting file %s", target if target is not None else name)
        if target is None or not await aiofiles.os.path.exists(target):
            return False
        try:
            await aiofiles.os.remove(target)
        except OSError as exc:
            logger.error("error deleting file %s: %s", target, exc)
            raise StorageError(f"could not delete {name}") from exc
        return True
