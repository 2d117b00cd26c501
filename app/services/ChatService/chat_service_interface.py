from abc import ABC, abstractmethod

from app.entities.message import ChatMessage, ImageAttachment
from app.entities.submission import SubmissionResult


class ChatServiceInterface(ABC):
    @property
    @abstractmethod
    def busy(self) -> bool:
        """True while a submission is waiting for the model reply."""

    @abstractmethod
    def transcript(self) -> list[ChatMessage]:
        """Return a snapshot of the transcript in display order."""

    @abstractmethod
    def pending_images(self) -> list[ImageAttachment]:
        """Return the images selected for the next submission."""

    @abstractmethod
    def attach(self, images: list[ImageAttachment]) -> list[ImageAttachment]:
        """Replace the pending images with a new selection."""

    @abstractmethod
    def clear_pending(self) -> None:
        """Drop the pending images."""

    @abstractmethod
    async def submit(
        self, text: str, images: list[ImageAttachment]
    ) -> SubmissionResult:
        """Send one submission and append the user and bot messages."""

    @abstractmethod
    async def submit_pending(self, text: str) -> SubmissionResult:
        """Submit text together with the pending images, clearing them."""
