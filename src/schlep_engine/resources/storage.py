"""File storage API (``/storage``)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from schlep_engine.core.envelope import decode
from schlep_engine.core.resource import ResourceClient
from schlep_engine.models import FileUpload


if TYPE_CHECKING:
    from os import PathLike


__all__ = ["StorageClient"]


class StorageClient(ResourceClient):
    """Store, list and delete files."""

    prefix = "/storage"

    def upload_file(
        self,
        file: str | PathLike[str],
        folder: str | None = None,
    ) -> FileUpload:
        """Upload a file, optionally into a folder."""
        fields = {"folder": folder} if folder else None
        response = self._post_multipart("/upload", file, fields)
        return decode(response, FileUpload)

    def list_files(
        self,
        folder: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> list[FileUpload]:
        params = {"folder": folder, "page": page, "page_size": page_size}
        response = self._get("/files", params)
        return decode(response, list[FileUpload])

    def delete_file(self, file_id: str) -> dict[str, Any]:
        response = self._delete(f"/files/{file_id}")
        return decode(response, dict[str, Any])
