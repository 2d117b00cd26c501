from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.entities.message import ImageAttachment


@dataclass(frozen=True)
class UploadedFile:
    """Raw file as received from the attachment control."""

    data: bytes
    mime_type: str | None
    file_name: str | None = None


class AttachmentServiceInterface(ABC):
    @abstractmethod
    def collect(self, uploads: list[UploadedFile]) -> list[ImageAttachment]:
        """Return the accepted images of a selection, silently dropping the rest."""

    @abstractmethod
    def admits(
        self,
        mime_type: str | None,
        size_bytes: int | None,
        file_name: str | None = None,
    ) -> bool:
        """Cheap check on upload metadata before the file body is read."""

    @abstractmethod
    def encode(
        self, data: bytes, mime_type: str | None, file_name: str | None = None
    ) -> ImageAttachment:
        """Validate and encode a single image, raising on rejection."""
