"""
Logs Controller
===============

Receives log entries from the browser and writes them through the
``client`` logger, so they land in the same buffered log files.
"""
import logging

from fastapi import APIRouter, status

from sitecms.application.dto.auth_dto import ClientLogRequest, StatusResponse
from sitecms.core.log_config import parse_log_level

client_logger = logging.getLogger("client")

router = APIRouter(tags=["logs"])


@router.post(
    "",
    response_model=StatusResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Record a client-side log entry",
)
async def record_client_log(request: ClientLogRequest) -> StatusResponse:
    level = parse_log_level(request.level)
    if request.metadata:
        client_logger.log(level, "%s | %s", request.message, request.metadata)
    else:
        client_logger.log(level, "%s", request.message)
    return StatusResponse(status="logged")
