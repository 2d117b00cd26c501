from abc import ABC, abstractmethod

from app.entities.message import ImageAttachment


class DoctorServiceInterface(ABC):
    @abstractmethod
    async def get_response(
        self,
        text: str,
        images: list[ImageAttachment],
    ) -> str:
        """
        Return the model reply for a single submission.

        Raises:
            SubmissionFailure: on any failure between building the request
                and receiving a usable reply.
        """
