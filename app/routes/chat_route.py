"""FastAPI routes backing the single-page chat canvas."""

from __future__ import annotations

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from pydantic import BaseModel

from app.entities.message import attachment_view
from app.services.AttachmentService.attachment_service_interface import (
    AttachmentServiceInterface,
    UploadedFile,
)
from app.services.ChatService.chat_service_interface import ChatServiceInterface
from app.services.SessionService.session_store import SessionStore

router = APIRouter(prefix="/api/sessions")


class SubmitPayload(BaseModel):
    text: str = ""


def _get_chat(request: Request, session_id: str) -> ChatServiceInterface:
    store: SessionStore = request.app.state.session_store
    try:
        return store.get(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _pending_view(chat: ChatServiceInterface) -> list[dict]:
    return [attachment_view(image) for image in chat.pending_images()]


@router.post("")
async def start_session_route(request: Request):
    store: SessionStore = request.app.state.session_store
    return {
        "session_id": store.create(),
        "failure_message": request.app.state.failure_message,
    }


@router.delete("/{session_id}")
async def close_session_route(request: Request, session_id: str):
    store: SessionStore = request.app.state.session_store
    try:
        store.close(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"session_id": session_id, "closed": True}


@router.get("/{session_id}/messages")
async def list_messages_route(request: Request, session_id: str):
    chat = _get_chat(request, session_id)
    return {
        "session_id": session_id,
        "busy": chat.busy,
        "messages": [message.to_dict() for message in chat.transcript()],
        "pending_images": _pending_view(chat),
    }


@router.post("/{session_id}/attachments")
async def attach_images_route(
    request: Request,
    session_id: str,
    files: list[UploadFile] | None = File(default=None),
):
    chat = _get_chat(request, session_id)
    attachment_service: AttachmentServiceInterface = (
        request.app.state.attachment_service
    )

    uploads = [
        UploadedFile(
            data=await upload.read(),
            mime_type=upload.content_type,
            file_name=upload.filename,
        )
        for upload in files or []
        if attachment_service.admits(upload.content_type, upload.size, upload.filename)
    ]
    chat.attach(attachment_service.collect(uploads))

    return {"session_id": session_id, "pending_images": _pending_view(chat)}


@router.delete("/{session_id}/attachments")
async def clear_attachments_route(request: Request, session_id: str):
    chat = _get_chat(request, session_id)
    chat.clear_pending()
    return {"session_id": session_id, "pending_images": []}


@router.post("/{session_id}/messages")
async def submit_message_route(
    request: Request, session_id: str, payload: SubmitPayload
):
    chat = _get_chat(request, session_id)
    result = await chat.submit_pending(payload.text)
    return {"session_id": session_id, "busy": chat.busy, **result.to_dict()}
