from __future__ import annotations

import asyncio
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict

from reaction_caption.entities.errors import MediaReadFailure


class EncodedPayload(TypedDict):
    """One media unit sent to the generation backend, base64 body only."""

    base64: str
    mime_type: str


@dataclass(frozen=True)
class MediaFile:
    """
    A user-supplied file as handed over by the upload collaborator.

    The declared MIME type is trusted; no byte-level sniffing happens.
    Exactly one of ``data`` or ``path`` backs the file contents.
    """

    name: str
    mime_type: str
    size_bytes: int
    data: bytes | None = field(default=None, repr=False)
    path: Path | None = None

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str, name: str = "upload") -> MediaFile:
        return cls(name=name, mime_type=mime_type, size_bytes=len(data), data=data)

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> MediaFile:
        file_path = Path(path)
        if mime_type is None:
            guessed, _ = mimetypes.guess_type(file_path.name)
            mime_type = guessed or "application/octet-stream"
        return cls(
            name=file_path.name,
            mime_type=mime_type,
            size_bytes=file_path.stat().st_size,
            path=file_path,
        )

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith("video/")

    async def read(self) -> bytes:
        """Read the full contents without blocking the event loop."""
        if self.data is not None:
            return self.data
        if self.path is None:
            raise MediaReadFailure(f"No content source for {self.name}")
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as exc:
            raise MediaReadFailure(f"Could not read {self.name}: {exc.strerror or exc}") from exc
