"""
DoctorService: single-shot Gemini call for the medical assistant chat.

Each submission becomes one stateless ``generate_content`` request made of a
text part (instruction preamble plus the user's message) followed by the
attached images as inline binary parts.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from pathlib import Path
from typing import Any

import httpx
from google import genai
from google.genai import errors, types
from langfuse import observe

from app.entities.message import ImageAttachment
from app.entities.submission import FailureKind, SubmissionFailure
from app.services.DoctorService.doctor_service_interface import (
    DoctorServiceInterface,
)


# Default prompt in case the file is not found
DEFAULT_DOCTOR_PROMPT = """You are DoctorGPT, a helpful medical assistant.

Explain medical information in simple, clear language and be calm, supportive
and professional. Do NOT claim to replace a licensed doctor, and do not guess
information that is not clearly readable in an uploaded prescription.

Always end with a short disclaimer:
"This is for informational purposes only and not a medical diagnosis."
"""

DEFAULT_EMPTY_TEXT_PLACEHOLDER = "Prescription uploaded"

# HTTP status codes the API uses for a rejected or missing credential
_CREDENTIAL_STATUS_CODES = {401, 403}


class DoctorService(DoctorServiceInterface):
    """Builds the request parts and performs the Gemini call."""

    def __init__(
        self,
        api_key: str,
        model_name: str,
        logger: logging.Logger,
        empty_text_placeholder: str = DEFAULT_EMPTY_TEXT_PLACEHOLDER,
        request_timeout: float | None = None,
        prompt_path: Path | None = None,
    ) -> None:
        """
        Initialize the service with the Gemini client configuration.

        Args:
            api_key: Gemini API key
            model_name: Model used for every request
            logger: Logger instance
            empty_text_placeholder: Text sent when only an image is submitted
            request_timeout: Seconds before the call is abandoned, None to wait
            prompt_path: Override for the instruction preamble file
        """
        self.model_name = model_name
        self.logger = logger
        self.empty_text_placeholder = empty_text_placeholder
        self.request_timeout = request_timeout or None
        self.prompt_path = prompt_path or (
            Path(__file__).resolve().parent / "doctor.prompt"
        )

        self.system_prompt = self._load_prompt()

        self.client = genai.Client(api_key=api_key)

        self.logger.info(
            "DoctorService initialized. Model: %s, timeout: %s",
            self.model_name,
            self.request_timeout,
        )

    def _load_prompt(self) -> str:
        try:
            return self.prompt_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            self.logger.warning(
                "Doctor prompt file not found at %s, using default",
                self.prompt_path,
            )
            return DEFAULT_DOCTOR_PROMPT.strip()

    def build_prompt(self, text: str) -> str:
        user_text = text if text.strip() else self.empty_text_placeholder
        return f"{self.system_prompt}\n\nUser message:\n{user_text}\n"

    def build_parts(
        self, text: str, images: list[ImageAttachment]
    ) -> list[types.Part]:
        """Return the ordered request parts: prompt text first, then images."""
        parts: list[types.Part] = [types.Part.from_text(text=self.build_prompt(text))]

        for attachment in images:
            try:
                image_bytes = base64.b64decode(attachment["base64"], validate=True)
            except (binascii.Error, ValueError) as exc:
                raise SubmissionFailure(
                    FailureKind.INVALID_REQUEST,
                    f"attachment {attachment.get('file_name') or 'unnamed'} is not valid base64",
                ) from exc

            parts.append(
                types.Part.from_bytes(
                    data=image_bytes, mime_type=attachment["mime_type"]
                )
            )

        return parts

    @observe(capture_input=False)
    async def get_response(
        self,
        text: str,
        images: list[ImageAttachment],
    ) -> str:
        """
        Send one request to Gemini and return the reply text.

        Raises:
            SubmissionFailure: with the kind of failure that occurred.
        """
        parts = self.build_parts(text, images)
        contents: list[Any] = [types.Content(role="user", parts=parts)]

        self.logger.info(
            "Requesting reply from %s (%d chars of user text, %d images)",
            self.model_name,
            len(text),
            len(images),
        )

        try:
            async with asyncio.timeout(self.request_timeout):
                response = await self.client.aio.models.generate_content(
                    model=self.model_name,
                    contents=contents,
                )
        except TimeoutError as exc:
            raise SubmissionFailure(FailureKind.TIMEOUT, "request timed out") from exc
        except errors.APIError as exc:
            kind = (
                FailureKind.CREDENTIALS
                if exc.code in _CREDENTIAL_STATUS_CODES
                else FailureKind.SERVICE
            )
            raise SubmissionFailure(kind, f"API error {exc.code}") from exc
        except httpx.TimeoutException as exc:
            raise SubmissionFailure(FailureKind.TIMEOUT, str(exc)) from exc
        except httpx.HTTPError as exc:
            raise SubmissionFailure(FailureKind.NETWORK, str(exc)) from exc
        except Exception as exc:
            raise SubmissionFailure(FailureKind.UNKNOWN, str(exc)) from exc

        try:
            reply = response.text if response else None
        except Exception as exc:
            raise SubmissionFailure(
                FailureKind.MALFORMED_RESPONSE, "response text unavailable"
            ) from exc

        if not reply or not reply.strip():
            raise SubmissionFailure(FailureKind.MALFORMED_RESPONSE, "empty reply")

        self.logger.info("Received reply of %d characters", len(reply))
        return reply
