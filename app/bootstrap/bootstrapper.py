from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse

from app.dependencies.components import get_components
from app.dependencies.services import (
    get_attachment_service,
    get_doctor_service,
    get_failure_message,
    get_session_store,
)
from app.routes.chat_route import router as chat_router
from app.services.AttachmentService.attachment_service_interface import (
    AttachmentServiceInterface,
)
from app.services.ChatService.chat_service import DEFAULT_FAILURE_MESSAGE
from app.services.SessionService.session_store import SessionStore

PUBLIC_DIR = Path(__file__).resolve().parents[1] / "public"


def create_app(
    session_store: SessionStore,
    attachment_service: AttachmentServiceInterface,
    failure_message: str = DEFAULT_FAILURE_MESSAGE,
) -> FastAPI:
    """
    Create the FastAPI application serving the chat page and its JSON API.
    """
    app = FastAPI(title="DoctorGPT")
    app.state.session_store = session_store
    app.state.attachment_service = attachment_service
    app.state.failure_message = failure_message

    @app.get("/", include_in_schema=False)
    async def serve_index():
        index_path = PUBLIC_DIR / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health(request: Request):
        return {
            "ok": True,
            "sessions": len(request.app.state.session_store),
        }

    app.include_router(chat_router)

    return app


def bootstrap_app(
    env: str | None = None,
    config_path: str = "configuration",
) -> FastAPI:
    components = get_components(env=env, config_path=config_path)
    doctor = get_doctor_service(components)

    return create_app(
        session_store=get_session_store(components, doctor),
        attachment_service=get_attachment_service(components),
        failure_message=get_failure_message(components),
    )
