"""File management routes: delete and rename."""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from googleapiclient.errors import HttpError
from pydantic import BaseModel, ValidationError

from ..auth.session_store import SessionContext
from ..utils.errors import format_error, handle_http_error
from ..utils.naming import build_display_name
from .dependencies import drive_gateway_for, require_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


class RenameRequest(BaseModel):
    """Metadata used to rebuild a photo's display name."""

    event: str = ""
    photographer: str = ""
    date: str = ""
    originalName: str = ""


async def read_rename_request(request: Request) -> RenameRequest:
    """
    Parse the rename body as JSON, or as a urlencoded/multipart form otherwise.

    Raises:
        HTTPException: 400 when the body is malformed or a field is not text.
    """
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            data = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Malformed JSON body.")
        if not isinstance(data, dict):
            raise HTTPException(status_code=400, detail="JSON body must be an object.")
    else:
        async with request.form() as form:
            data = {key: value for key, value in form.items() if isinstance(value, str)}

    try:
        return RenameRequest.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(str(error["loc"][0]) for error in e.errors() if error["loc"])
        raise HTTPException(status_code=400, detail=f"Invalid rename fields: {fields}")


@router.delete("/{file_id}")
async def delete_file(
    file_id: str,
    request: Request,
    session: SessionContext = Depends(require_session),
) -> JSONResponse:
    """
    Permanently delete a file.

    Not-found is reported like any other failure.
    """
    try:
        gateway = drive_gateway_for(request, session)
        await asyncio.to_thread(gateway.delete_file, file_id)
    except HttpError as e:
        logger.error(format_error("Delete file", handle_http_error(e, file_id)))
        return JSONResponse({"message": "Failed to delete file"}, status_code=500)
    except Exception as e:
        logger.error(format_error("Delete file", e), exc_info=True)
        return JSONResponse({"message": "Failed to delete file"}, status_code=500)

    logger.info(f"Deleted file {file_id}")
    return JSONResponse({"message": "File deleted successfully"}, status_code=200)


@router.put("/{file_id}")
async def rename_file(
    file_id: str,
    request: Request,
    session: SessionContext = Depends(require_session),
) -> JSONResponse:
    """
    Rename a file from new event metadata.

    Only the name changes. The file stays in its current folder even when
    ``event`` differs from the folder it was uploaded to.
    """
    body = await read_rename_request(request)
    new_name = build_display_name(body.date, body.photographer, body.originalName)

    try:
        gateway = drive_gateway_for(request, session)
        await asyncio.to_thread(gateway.update_file, file_id, new_name)
    except HttpError as e:
        logger.error(format_error("Rename file", handle_http_error(e, file_id)))
        return JSONResponse({"message": "Failed to update file"}, status_code=500)
    except Exception as e:
        logger.error(format_error("Rename file", e), exc_info=True)
        return JSONResponse({"message": "Failed to update file"}, status_code=500)

    logger.info(f"Renamed file {file_id} to '{new_name}'")
    return JSONResponse(
        {"message": "File updated successfully", "newName": new_name},
        status_code=200,
    )
