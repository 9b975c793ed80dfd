import logging

from fastapi import Request, Response

from .custom import InvalidQueryError

logger = logging.getLogger(__name__)


async def invalid_query_error_handler(_request: Request, exc: InvalidQueryError) -> Response:
    logger.warning("Invalid search query: %s", exc.message)
    return Response(status_code=400)
