from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

from app.tariff_loader import TariffSourceError

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Flatten pydantic errors into 'field: message' strings"""
    errors = []
    for error in exc.errors():
        # Skip the leading "body"/"query" part of the location
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        field = ".".join(location) if location else "request"
        errors.append(f"{field}: {error['msg']}")

    logger.error(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=400,
        content={
            "status": "error",
            "type": "validation_error",
            "errors": errors
        }
    )


async def tariff_source_exception_handler(request: Request, exc: TariffSourceError):
    """Report an unreadable tariff as a service outage"""
    logger.error(f"Tariff unavailable while serving {request.url.path}: {str(exc)}")

    return JSONResponse(
        status_code=503,
        content={
            "status": "error",
            "type": "tariff_unavailable",
            "errors": [str(exc)]
        }
    )
