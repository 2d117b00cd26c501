from __future__ import annotations

import asyncio
import logging

from app.entities.message import ChatMessage, ImageAttachment, PendingSubmission
from app.entities.submission import (
    FailureKind,
    SubmissionFailure,
    SubmissionResult,
    SubmissionStatus,
)
from app.services.ChatService.chat_service_interface import ChatServiceInterface
from app.services.DoctorService.doctor_service_interface import (
    DoctorServiceInterface,
)

DEFAULT_FAILURE_MESSAGE = "Something went wrong. Please try again."


class ChatService(ChatServiceInterface):
    """
    Chat orchestrator for one page session.

    Owns the append-only transcript, the busy flag and the pending images.
    Submissions are serialized: a second submit waits for the first one to
    append its bot message before it appends its own user message.
    """

    def __init__(
        self,
        doctor: DoctorServiceInterface,
        logger: logging.Logger,
        failure_message: str = DEFAULT_FAILURE_MESSAGE,
    ) -> None:
        self.doctor: DoctorServiceInterface = doctor
        self.logger: logging.Logger = logger
        self.failure_message: str = failure_message

        self._messages: list[ChatMessage] = []
        self._pending_images: list[ImageAttachment] = []
        self._busy: bool = False
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._busy

    def transcript(self) -> list[ChatMessage]:
        return list(self._messages)

    def pending_images(self) -> list[ImageAttachment]:
        return list(self._pending_images)

    def attach(self, images: list[ImageAttachment]) -> list[ImageAttachment]:
        self._pending_images = list(images)
        self.logger.debug("Pending images replaced (%s)", len(self._pending_images))
        return self.pending_images()

    def clear_pending(self) -> None:
        self._pending_images = []

    async def submit_pending(self, text: str) -> SubmissionResult:
        images = self.pending_images()
        if PendingSubmission(text=text, images=tuple(images)).is_empty():
            return SubmissionResult.ignored()

        self.clear_pending()
        return await self.submit(text, images)

    async def submit(
        self, text: str, images: list[ImageAttachment]
    ) -> SubmissionResult:
        submission = PendingSubmission(text=text, images=tuple(images))
        if submission.is_empty():
            self.logger.debug("Ignoring empty submission")
            return SubmissionResult.ignored()

        async with self._lock:
            return await self._run(submission)

    async def _run(self, submission: PendingSubmission) -> SubmissionResult:
        user_message = ChatMessage(
            role="user", text=submission.text, images=submission.images
        )
        self._busy = True
        self._messages.append(user_message)

        failure_kind: FailureKind | None = None
        bot_message: ChatMessage | None = None
        try:
            try:
                bot_text = await self.doctor.get_response(
                    submission.text, list(submission.images)
                )
            except SubmissionFailure as failure:
                failure_kind = failure.kind
                self.logger.error(
                    "Submission failed (%s): %s", failure.kind.value, failure.detail
                )
            except Exception as exc:
                failure_kind = FailureKind.UNKNOWN
                self.logger.error(
                    "Unexpected error during submission: %s", exc, exc_info=True
                )

            if failure_kind is not None:
                bot_text = self.failure_message

            bot_message = ChatMessage(role="bot", text=bot_text)
            self._messages.append(bot_message)
        finally:
            # cancelled mid-call: still pair the user message with one reply
            if bot_message is None:
                self.logger.warning("Submission cancelled before a reply arrived")
                self._messages.append(
                    ChatMessage(role="bot", text=self.failure_message)
                )
            self._busy = False

        return SubmissionResult(
            status=SubmissionStatus.OK
            if failure_kind is None
            else SubmissionStatus.FAILED,
            user_message=user_message,
            bot_message=bot_message,
            failure_kind=failure_kind,
        )
