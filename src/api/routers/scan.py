"""API router for scanning an ingredient label image."""

import base64
import binascii
import logging
import re

from fastapi import APIRouter, BackgroundTasks, Depends

from config import settings
from models.database import SessionLocal
from models.schemas import ErrorResponse, ScanRequest, ScanResponse
from services.errors import (
    IMAGE_TOO_LARGE_MESSAGE,
    CollaboratorError,
    InputValidationError,
    ScanError,
)
from services.ingredient_pipeline import learn_from_verdict, scan_image
from services.store_session import SessionFactory
from services.text_extraction import BaseTextExtractor, VisionTextExtractor

logger = logging.getLogger(__name__)

router = APIRouter()

_DATA_URI_PREFIX = re.compile(r"^data:image/[\w.+-]+;base64,", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_text_extractor() -> BaseTextExtractor:
    return VisionTextExtractor()


def get_session_factory() -> SessionFactory:
    return SessionLocal


def decode_image(value: object, max_bytes: int) -> bytes:
    if not isinstance(value, str):
        raise InputValidationError()
    encoded = _WHITESPACE.sub("", _DATA_URI_PREFIX.sub("", value.strip()))
    if not encoded:
        raise InputValidationError()
    try:
        image = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise InputValidationError()
    if not image:
        raise InputValidationError()
    if len(image) > max_bytes:
        raise InputValidationError(IMAGE_TOO_LARGE_MESSAGE)
    return image


async def scan_ingredients(
    payload: ScanRequest,
    background_tasks: BackgroundTasks,
    extractor: BaseTextExtractor = Depends(get_text_extractor),
    session_factory: SessionFactory = Depends(get_session_factory),
) -> dict:
    """
    Read the ingredient list from a label photo and classify it.

    The learner is scheduled only after a verdict exists, so rejected scans
    never reach the candidate store.
    """
    image = decode_image(payload.image, settings.max_image_bytes)
    try:
        verdict = await scan_image(image, extractor, session_factory=session_factory)
    except ScanError:
        raise
    except Exception as exc:
        logger.exception("Unexpected failure while scanning ingredients")
        raise CollaboratorError(f"Unexpected failure: {exc}") from exc

    if settings.learner_enabled:
        background_tasks.add_task(learn_from_verdict, verdict, session_factory)
    return verdict.to_dict()


router.add_api_route(
    "/scan",
    scan_ingredients,
    methods=["POST"],
    response_model=ScanResponse,
    responses=ERROR_RESPONSES,
)

# Path used by the mobile client.
legacy_router = APIRouter()
legacy_router.add_api_route(
    "/scan-ingredients",
    scan_ingredients,
    methods=["POST"],
    response_model=ScanResponse,
    responses=ERROR_RESPONSES,
    include_in_schema=False,
)
