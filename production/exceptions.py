import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """A referenced record does not exist."""


class ReferencedRecordError(Exception):
    """A record cannot be removed while other records point at it."""


class PersistenceError(Exception):
    """The database rejected a write the service expected to succeed."""


def _kg(value):
    return format(Decimal(value).normalize(), "f")


class InsufficientInventoryError(ValidationError):
    def __init__(self, material, available, required):
        self.material = material
        self.available = available
        self.required = required
        super().__init__(
            f"Not enough {material} in inventory. "
            f"Available: {_kg(available)}kg, Required: {_kg(required)}kg"
        )


def _validation_payload(exc):
    if hasattr(exc, "message_dict"):
        return {"error": exc.message_dict}
    return {"error": " ".join(exc.messages)}


def api_exception_handler(exc, context):
    """Map service-layer exceptions onto HTTP responses.

    Anything DRF already understands (serializer errors, 404s raised by
    ``get_object``, auth failures) goes through the stock handler first.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, NotFoundError):
        return Response({"error": str(exc)}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, InsufficientInventoryError):
        return Response(
            {
                "error": exc.messages[0],
                "material": exc.material,
                "available": exc.available,
                "required": exc.required,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, ValidationError):
        return Response(_validation_payload(exc), status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, ReferencedRecordError):
        return Response({"error": str(exc)}, status=status.HTTP_409_CONFLICT)

    if isinstance(exc, (PersistenceError, DatabaseError)):
        request = context.get("request")
        logger.exception(
            "Persistence failure in %s %s",
            getattr(request, "method", "?"),
            getattr(request, "path", "?"),
        )
        return Response(
            {"error": "The operation could not be saved."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return None
