"""
Decorators for FastAPI endpoint error handling.

This module provides decorators to handle common patterns in paint rendering
endpoints, such as processing timeouts and mapping paint errors to HTTP
status codes.
"""

import asyncio
import logging
from functools import wraps
from typing import Callable

from fastapi import HTTPException

from utils.validation import (
    MissingCapabilityError,
    PaintError,
    PaintValidationError,
    VALIDATION_CONSTANTS,
)

logger = logging.getLogger(__name__)


def handle_paint_errors(func: Callable) -> Callable:
    """
    Decorator to handle common paint rendering patterns:
    - Processing timeout management
    - Standardized error handling

    Malformed paints and composites become 422 responses, a paint missing an
    expected accessor becomes 500, and anything unexpected is logged with
    its traceback and becomes 500.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        timeout_seconds = VALIDATION_CONSTANTS['MAX_PROCESSING_TIME_SECONDS']
        try:
            return await asyncio.wait_for(func(*args, **kwargs), timeout=timeout_seconds)

        except asyncio.TimeoutError:
            logger.error(f"Rendering timed out after {timeout_seconds}s")
            raise HTTPException(
                status_code=408,
                detail=f"Rendering timed out after {timeout_seconds} seconds."
            )
        except PaintValidationError as e:
            logger.warning(f"Paint validation failed: {e}")
            raise HTTPException(
                status_code=422,
                detail=f"Paint validation failed: {str(e)}"
            )
        except MissingCapabilityError as e:
            logger.error(f"Paint is missing an accessor: {e}")
            raise HTTPException(
                status_code=500,
                detail=f"Paint is missing an accessor: {str(e)}"
            )
        except PaintError as e:
            logger.warning(f"Paint could not be rendered: {e}")
            raise HTTPException(
                status_code=422,
                detail=f"Paint could not be rendered: {str(e)}"
            )
        except HTTPException:
            # Re-raise HTTP exceptions as-is
            raise
        except Exception as e:
            logger.error(f"Unexpected error rendering swatch: {e}")
            logger.exception("Full exception details:")
            raise HTTPException(
                status_code=500,
                detail=f"Internal server error during rendering: {str(e)}"
            )

    return wrapper
