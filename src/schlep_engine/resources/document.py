"""Document extraction API (``/extract``)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from schlep_engine.core.envelope import decode
from schlep_engine.core.resource import ResourceClient


if TYPE_CHECKING:
    from os import PathLike


__all__ = ["DocumentClient"]


def _form_bool(value: bool) -> str:  # noqa: FBT001
    return "true" if value else "false"


class DocumentClient(ResourceClient):
    """Extract text and tables from uploaded documents."""

    prefix = "/extract"

    def extract_text(
        self,
        file: str | PathLike[str],
        *,
        extract_tables: bool = True,
        extract_images: bool = False,
    ) -> dict[str, Any]:
        """Extract text from a document.

        Args:
            file: Local document to upload.
            extract_tables: Also extract tables found in the document.
            extract_images: Also extract embedded images.

        Returns:
            The extraction result.
        """
        fields = {
            "extract_tables": _form_bool(extract_tables),
            "extract_images": _form_bool(extract_images),
        }
        response = self._post_multipart("/text", file, fields)
        return decode(response, dict[str, Any])

    def extract_tables(self, file: str | PathLike[str]) -> dict[str, Any]:
        response = self._post_multipart("/tables", file)
        return decode(response, dict[str, Any])
