import logging

from fastapi.responses import JSONResponse

from lotto_admin.core.config import settings

logger = logging.getLogger(__name__)

REDACTED_ERROR = "Internal server error"


def server_error(message: str, exc: Exception) -> JSONResponse:
    """500 envelope used by every route: {success: false, message, error}."""
    logger.exception("%s: %s", message, exc)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": message,
            "error": str(exc) if settings.EXPOSE_ERROR_DETAILS else REDACTED_ERROR,
        },
    )
