"""Vault storage: async file operations relative to a root folder."""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath


class VaultStorage:
    """Read and create files inside a vault folder.

    Paths are POSIX strings relative to ``root``. Blocking filesystem calls
    run in a thread pool. ``create_text`` and ``create_binary`` never
    overwrite an existing file.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser().resolve()

    def resolve(self, path: str) -> Path:
        """Map a vault-relative path to a filesystem path inside the root."""
        relative = PurePosixPath(path.replace("\\", "/"))
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"Path escapes the vault: {path}")
        return self.root.joinpath(*relative.parts)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self.resolve(path).exists)

    async def read_bytes(self, path: str) -> bytes:
        return await asyncio.to_thread(self.resolve(path).read_bytes)

    async def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return await asyncio.to_thread(self.resolve(path).read_text, encoding=encoding)

    async def create_folder(self, path: str) -> None:
        """Create a folder (and missing parents); existing folders are kept."""
        await asyncio.to_thread(self.resolve(path).mkdir, parents=True, exist_ok=True)

    async def create_binary(self, path: str, data: bytes) -> None:
        """Write a new binary file.

        Raises:
            FileExistsError: If a file already exists at ``path``.
        """
        await asyncio.to_thread(_write_new, self.resolve(path), data)

    async def create_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write a new text file.

        Raises:
            FileExistsError: If a file already exists at ``path``.
        """
        await asyncio.to_thread(_write_new, self.resolve(path), content.encode(encoding))

    async def list_files(self, suffix: str) -> list[str]:
        """List vault-relative paths of files ending with ``suffix``, sorted."""
        return await asyncio.to_thread(self._list_files, suffix.lower())

    def _list_files(self, suffix: str) -> list[str]:
        return sorted(
            path.relative_to(self.root).as_posix()
            for path in self.root.rglob("*")
            if path.is_file() and path.name.lower().endswith(suffix)
        )


def _write_new(path: Path, data: bytes) -> None:
    with path.open("xb") as handle:
        handle.write(data)
