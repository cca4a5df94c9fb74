"""
Upload Routes
=============

Endpoints:
- POST /api/upload - Import a CSV/XLSX/XLS file of indicators

Accepts multipart form data with a ``file`` field.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse

from ioc_tracker.api.dependencies import get_ingestion_service
from ioc_tracker.config.settings import get_settings
from ioc_tracker.schemas.responses import ErrorResponse, UploadResponse
from ioc_tracker.services.ingestion_service import IngestionService
from ioc_tracker.utils.errors import FileSizeError, ParsingError, PersistenceError
from ioc_tracker.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def read_upload(file: UploadFile, limit: int) -> bytes:
    """
    Read an upload, never buffering more than ``limit`` + 1 bytes.

    The declared multipart size is checked first; when it is unknown the
    read itself is capped and an overflow byte means the file is too big.

    Raises:
        FileSizeError: If the upload is larger than ``limit`` bytes
    """
    size = file.size
    if size is None or size <= limit:
        content = await file.read(limit + 1)
        size = len(content)
    if size > limit:
        raise FileSizeError(
            message=f"File exceeds maximum size of {limit // (1024 * 1024)}MB",
            details={"filename": file.filename, "max_bytes": limit},
        )
    return content


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Import indicator spreadsheet",
    responses={
        201: {"description": "File imported"},
        400: {"model": ErrorResponse, "description": "Missing, oversized or unsupported file"},
        500: {"model": ErrorResponse, "description": "File could not be parsed or stored"},
    },
)
async def upload_file(
    service: Annotated[IngestionService, Depends(get_ingestion_service)],
    file: Annotated[UploadFile | None, File(description="CSV or Excel file")] = None,
) -> UploadResponse | JSONResponse:
    """
    Parse the uploaded spreadsheet, classify each value and store it.

    Unsupported extensions and oversized files are rejected with 400 by
    the application error handler.
    """
    if file is None or not file.filename:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "No file uploaded"},
        )

    content = await read_upload(file, get_settings().max_upload_size_bytes)

    try:
        result = await service.ingest(content, file.filename)
    except (ParsingError, PersistenceError) as e:
        logger.error(
            "Upload failed",
            filename=file.filename,
            error_type=type(e).__name__,
            message=e.message,
            details=e.details,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Failed to parse file"},
        )

    return UploadResponse(
        message=f"Successfully imported {result.imported_count} entries",
        imported=result.imported_count,
    )
