"""Bounded-concurrency upload of a batch of photos into one event folder."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from googleapiclient.errors import HttpError

from .client import DriveGateway
from .utils.errors import format_error, handle_http_error
from .utils.naming import build_display_name

logger = logging.getLogger(__name__)


@dataclass
class UploadItem:
    """One file received from the client."""

    original_name: str
    content: bytes
    mime_type: str


@dataclass
class UploadOutcome:
    """Result of uploading one UploadItem."""

    item: UploadItem
    display_name: str
    file: Optional[Dict[str, Any]] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def upload_batch(
    gateway: DriveGateway,
    folder_id: str,
    items: Sequence[UploadItem],
    date: str,
    photographer: str,
    concurrency: int,
) -> List[UploadOutcome]:
    """Upload every item into ``folder_id``, at most ``concurrency`` at a time.

    A failed upload does not cancel the others and nothing is rolled back.

    Returns:
        One outcome per item, in the order the items were given.
    """
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def _upload_one(item: UploadItem, display_name: str) -> Dict[str, Any]:
        async with semaphore:
            return await asyncio.to_thread(
                gateway.create_file,
                display_name,
                item.content,
                item.mime_type,
                folder_id,
            )

    names = [build_display_name(date, photographer, item.original_name) for item in items]
    results = await asyncio.gather(
        *(_upload_one(item, name) for item, name in zip(items, names)),
        return_exceptions=True,
    )

    outcomes: List[UploadOutcome] = []
    for item, name, result in zip(items, names, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            error = handle_http_error(result) if isinstance(result, HttpError) else result
            logger.error(format_error(f"Upload of '{name}'", error))
            outcomes.append(UploadOutcome(item=item, display_name=name, error=result))
        else:
            outcomes.append(UploadOutcome(item=item, display_name=name, file=result))

    succeeded = sum(1 for outcome in outcomes if outcome.ok)
    logger.info(f"Uploaded {succeeded}/{len(outcomes)} files to folder {folder_id}")
    return outcomes
