import logging

from fastapi import APIRouter, Request

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/")
def diagnostic_echo(request: Request):
    """回显请求信息，用于排查代理、CORS 等问题"""
    headers = dict(request.headers)
    logger.debug(f"Diagnostic echo headers: {headers}")
    return {
        "method": request.method,
        "url": str(request.url),
        "headers": headers,
        "client": request.client.host if request.client else None,
    }
