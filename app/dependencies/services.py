from app.bootstrap.components import Components, get_api_key
from app.components.configuration.configuration_interface import (
    ConfigurationInterface,
)
from app.components.logger.logger_interface import LoggerInterface
from app.services.AttachmentService.attachment_service import (
    DEFAULT_MAX_IMAGE_BYTES,
    AttachmentService,
)
from app.services.AttachmentService.attachment_service_interface import (
    AttachmentServiceInterface,
)
from app.services.ChatService.chat_service import DEFAULT_FAILURE_MESSAGE, ChatService
from app.services.ChatService.chat_service_interface import ChatServiceInterface
from app.services.DoctorService.doctor_service import (
    DEFAULT_EMPTY_TEXT_PLACEHOLDER,
    DoctorService,
)
from app.services.DoctorService.doctor_service_interface import (
    DoctorServiceInterface,
)
from app.services.SessionService.session_store import (
    DEFAULT_SESSION_IDLE_SECONDS,
    SessionStore,
)


def get_doctor_service(components: Components) -> DoctorServiceInterface:
    """
    Create the Gemini-backed doctor service.

    Fails fast when GEMINI_API_KEY is missing so the server never starts
    without a credential.
    """
    configuration = components.get_component(ConfigurationInterface)

    model_name = configuration.get_configuration(
        "MODEL_NAME", str, default="gemini-2.5-flash-lite"
    )
    placeholder = configuration.get_configuration(
        "EMPTY_TEXT_PLACEHOLDER", str, default=DEFAULT_EMPTY_TEXT_PLACEHOLDER
    )
    timeout_val = configuration.get_configuration(
        "REQUEST_TIMEOUT_SECONDS", float, default=0.0
    )
    request_timeout = float(timeout_val) if timeout_val else None

    return DoctorService(
        api_key=get_api_key(),
        model_name=model_name,
        logger=components.get_component(LoggerInterface).get_logger("DoctorService"),
        empty_text_placeholder=placeholder,
        request_timeout=request_timeout,
    )


def get_attachment_service(components: Components) -> AttachmentServiceInterface:
    configuration = components.get_component(ConfigurationInterface)

    max_image_bytes = configuration.get_configuration(
        "MAX_IMAGE_BYTES", int, default=DEFAULT_MAX_IMAGE_BYTES
    )
    max_images = configuration.get_configuration("MAX_PENDING_IMAGES", int, default=1)

    return AttachmentService(
        logger=components.get_component(LoggerInterface).get_logger(
            "AttachmentService"
        ),
        max_image_bytes=max_image_bytes,
        max_images=max_images,
    )


def get_failure_message(components: Components) -> str:
    configuration = components.get_component(ConfigurationInterface)
    return configuration.get_configuration(
        "FAILURE_MESSAGE", str, default=DEFAULT_FAILURE_MESSAGE
    )


def get_session_store(
    components: Components, doctor: DoctorServiceInterface
) -> SessionStore:
    configuration = components.get_component(ConfigurationInterface)
    logger = components.get_component(LoggerInterface)

    failure_message = get_failure_message(components)
    idle_seconds = configuration.get_configuration(
        "SESSION_IDLE_SECONDS", float, default=DEFAULT_SESSION_IDLE_SECONDS
    )
    chat_logger = logger.get_logger("ChatService")

    def chat_factory() -> ChatServiceInterface:
        return ChatService(
            doctor=doctor,
            logger=chat_logger,
            failure_message=failure_message,
        )

    return SessionStore(
        chat_factory=chat_factory,
        logger=logger.get_logger("SessionStore"),
        idle_seconds=idle_seconds,
    )
