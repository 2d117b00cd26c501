from __future__ import annotations

import base64
import logging

from app.entities.message import ImageAttachment
from app.services.AttachmentService.attachment_service_interface import (
    AttachmentServiceInterface,
    UploadedFile,
)

DEFAULT_MAX_IMAGE_BYTES: int = 5 * 1024 * 1024


class ImageProcessingError(Exception):
    """Base error for attachment processing failures."""


class ImageTooLargeError(ImageProcessingError):
    def __init__(self, size_bytes: int) -> None:
        self.size_bytes = size_bytes
        super().__init__(f"Attachment exceeds size limit: {size_bytes} bytes")


class UnsupportedImageError(ImageProcessingError):
    def __init__(self, mime_type: str | None) -> None:
        self.mime_type = mime_type
        super().__init__(f"Unsupported mime type: {mime_type}")


class EmptyImageError(ImageProcessingError):
    """Raised when an uploaded image has no content."""


class AttachmentService(AttachmentServiceInterface):
    def __init__(
        self,
        logger: logging.Logger,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
        max_images: int = 1,
    ) -> None:
        if max_images < 1:
            raise ValueError("max_images must be at least 1")

        self.logger: logging.Logger = logger
        self.max_image_bytes: int = max_image_bytes
        self.max_images: int = max_images

    @staticmethod
    def _normalize_mime_type(mime_type: str | None) -> str:
        return (mime_type or "").split(";", 1)[0].strip().lower()

    def admits(
        self,
        mime_type: str | None,
        size_bytes: int | None,
        file_name: str | None = None,
    ) -> bool:
        if not self._normalize_mime_type(mime_type).startswith("image/"):
            self.logger.info(
                "Skipping attachment with mime type: %s", mime_type or "unknown"
            )
            return False

        if size_bytes is not None and size_bytes > self.max_image_bytes:
            self.logger.warning(
                "Skipping oversized image %s (%s bytes) without reading it",
                file_name or "unnamed",
                size_bytes,
            )
            return False

        return True

    def encode(
        self, data: bytes, mime_type: str | None, file_name: str | None = None
    ) -> ImageAttachment:
        normalized = self._normalize_mime_type(mime_type)
        if not normalized.startswith("image/"):
            raise UnsupportedImageError(mime_type)

        size_bytes = len(data)
        if size_bytes == 0:
            raise EmptyImageError("Empty attachment")

        if size_bytes > self.max_image_bytes:
            raise ImageTooLargeError(size_bytes)

        attachment: ImageAttachment = {
            "mime_type": normalized,
            "size_bytes": size_bytes,
            "base64": base64.b64encode(data).decode("ascii"),
            "file_name": file_name,
        }
        self.logger.info(
            "Collected image attachment: %s (%s bytes)",
            file_name or "unnamed",
            size_bytes,
        )
        return attachment

    def collect(self, uploads: list[UploadedFile]) -> list[ImageAttachment]:
        attachments: list[ImageAttachment] = []

        for upload in uploads:
            if len(attachments) >= self.max_images:
                self.logger.info(
                    "Ignoring extra attachment %s: limit of %s reached",
                    upload.file_name or "unnamed",
                    self.max_images,
                )
                continue

            try:
                attachments.append(
                    self.encode(upload.data, upload.mime_type, upload.file_name)
                )
            except ImageTooLargeError as error:
                self.logger.warning(
                    "Discarding oversized image %s (%s bytes)",
                    upload.file_name or "unnamed",
                    error.size_bytes,
                )
            except UnsupportedImageError as error:
                self.logger.info(
                    "Discarding attachment with mime type: %s",
                    error.mime_type or "unknown",
                )
            except EmptyImageError:
                self.logger.warning(
                    "Discarding empty attachment %s", upload.file_name or "unnamed"
                )

        return attachments
