from dataclasses import dataclass, field
from typing import Literal, TypedDict


class ImageAttachment(TypedDict):
    """Binary image payload encoded as base64."""

    base64: str
    file_name: str | None
    mime_type: str
    size_bytes: int


Role = Literal["user", "bot"]


def attachment_view(image: ImageAttachment) -> dict:
    """Return the JSON view of an attachment, embedding the image as a data URL."""
    return {
        "file_name": image["file_name"],
        "mime_type": image["mime_type"],
        "size_bytes": image["size_bytes"],
        "data_url": f"data:{image['mime_type']};base64,{image['base64']}",
    }


@dataclass(frozen=True)
class ChatMessage:
    """Transcript entry. Never mutated once appended."""

    role: Role
    text: str
    images: tuple[ImageAttachment, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "role": self.role,
            "text": self.text,
            "images": [attachment_view(image) for image in self.images],
        }


@dataclass(frozen=True)
class PendingSubmission:
    """Text and images captured at send time."""

    text: str
    images: tuple[ImageAttachment, ...] = field(default_factory=tuple)

    def is_empty(self) -> bool:
        return not self.text.strip() and not self.images
