import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import (
    DocumentNotReady, Duplicate, IllegalTransition, InvalidInput, NotFound, PortalError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Duplicate: status.HTTP_409_CONFLICT,
    IllegalTransition: status.HTTP_409_CONFLICT,
    DocumentNotReady: status.HTTP_403_FORBIDDEN,
    InvalidInput: status.HTTP_400_BAD_REQUEST,
}


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    return str(detail)


def portal_exception_handler(exc, context):
    """Every error body carries a human-readable "message"."""
    if isinstance(exc, PortalError):
        code = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info("API %s: %s", code, exc.message)
        return Response({"message": exc.message}, status=code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {"message": _first_message(exc.detail), "errors": exc.detail}
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"message": str(response.data["detail"])}
    return response
