"""Photo upload route."""

import asyncio
import logging
from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from googleapiclient.errors import HttpError
from starlette.datastructures import FormData, UploadFile

from ..auth.session_store import SessionContext
from ..uploads import UploadItem, upload_batch
from ..utils.constants import DEFAULT_FILE_MIME_TYPE, MAX_UPLOAD_FILES, UPLOAD_FIELD_NAME
from ..utils.errors import ConfigurationError, format_error, handle_http_error
from .dependencies import drive_gateway_for, get_app_config, require_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])

UPLOAD_FAILED_MESSAGE = "Failed to upload files."


def _failure() -> JSONResponse:
    return JSONResponse({"message": UPLOAD_FAILED_MESSAGE}, status_code=500)


def _text_field(form: FormData, name: str) -> str:
    value: Union[str, UploadFile, None] = form.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"'{name}' must be a text field.")
    return value


def _file_parts(form: FormData) -> List[UploadFile]:
    parts = form.getlist(UPLOAD_FIELD_NAME)
    if any(not isinstance(part, UploadFile) for part in parts):
        raise HTTPException(
            status_code=400, detail=f"'{UPLOAD_FIELD_NAME}' must only contain files."
        )
    return parts


@router.post("/upload")
async def upload_files(
    request: Request,
    session: SessionContext = Depends(require_session),
) -> JSONResponse:
    """
    Upload up to 50 photos into the event's folder.

    The multipart body is only parsed once the session has been checked.
    Returns 200 when every file was created, 207 with a ``failed`` list when only
    some were, and 500 when none were or the event folder could not be resolved.
    """
    async with request.form() as form:
        files = _file_parts(form)
        event = _text_field(form, "event")
        photographer = _text_field(form, "photographer")
        date = _text_field(form, "date")

        if not files:
            raise HTTPException(status_code=400, detail="No files uploaded.")
        if len(files) > MAX_UPLOAD_FILES:
            raise HTTPException(
                status_code=400,
                detail=f"Too many files. At most {MAX_UPLOAD_FILES} files per upload.",
            )
        if not event.strip():
            raise HTTPException(status_code=400, detail="Event name is required.")

        items = [
            UploadItem(
                original_name=upload.filename or "upload",
                content=await upload.read(),
                mime_type=upload.content_type or DEFAULT_FILE_MIME_TYPE,
            )
            for upload in files
        ]

    config = get_app_config(request)

    try:
        if not config.root_folder_id:
            raise ConfigurationError("GOOGLE_DRIVE_FOLDER_ID is not set")
        gateway = drive_gateway_for(request, session)
        folder_id = await asyncio.to_thread(
            gateway.resolve_event_folder, event, config.root_folder_id
        )
    except HttpError as e:
        logger.error(format_error("Resolve event folder", handle_http_error(e)))
        return _failure()
    except Exception as e:
        logger.error(format_error("Resolve event folder", e), exc_info=True)
        return _failure()

    outcomes = await upload_batch(
        gateway,
        folder_id,
        items,
        date=date,
        photographer=photographer,
        concurrency=config.upload_concurrency,
    )

    uploaded = [outcome.file for outcome in outcomes if outcome.ok]
    failed = [
        {"originalName": outcome.item.original_name, "error": "Upload failed"}
        for outcome in outcomes
        if not outcome.ok
    ]

    if not uploaded:
        return _failure()
    if failed:
        return JSONResponse(
            {
                "message": "Some files failed to upload.",
                "files": uploaded,
                "failed": failed,
            },
            status_code=207,
        )
    return JSONResponse(
        {"message": "All files uploaded successfully!", "files": uploaded},
        status_code=200,
    )
