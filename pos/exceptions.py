"""Custom exception handlers for the pos REST API."""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler


def custom_exception_handler(exc, context):
    """Report errors in the same ``{success, error}`` shape the services use.

    Django ``ValidationError`` is treated as a DRF validation error; anything
    DRF does not handle falls through as a 500.
    """
    if isinstance(exc, DjangoValidationError):
        exc = DRFValidationError(detail=exc.messages)

    if isinstance(exc, Http404):
        return Response({"success": False, "error": "Not found.", "status_code": 404}, status=404)

    response = exception_handler(exc, context)
    if response is not None:
        response.data = {
            "success": False,
            "error": response.data,
            "status_code": response.status_code,
        }
    return response
