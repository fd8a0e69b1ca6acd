import logging
from typing import List, Optional, Tuple

import httpx
from fastapi import Response
from starlette.datastructures import FormData, UploadFile

from app.core.config import Settings, settings
from app.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class PassthroughService:
    """
    透明转发：附加凭证后原样转发请求，并原样返回上游响应 (包括错误状态码)
    """

    def __init__(self, config: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.config.UPSTREAM_TIMEOUT, transport=self.transport)

    async def forward_transcription(self, form: FormData) -> httpx.Response:
        # 所有字段都作为 multipart part 发送 (文本字段 filename 为 None)，保证始终是 multipart/form-data
        parts: List[Tuple[str, Tuple[Optional[str], bytes, Optional[str]]]] = []
        for key, value in form.multi_items():
            if key == "model":
                continue
            if isinstance(value, UploadFile):
                parts.append((key, (value.filename, await value.read(), value.content_type)))
            else:
                parts.append((key, (None, value.encode("utf-8"), None)))
        # 转写模型固定，不允许客户端指定
        parts.append(("model", (None, self.config.TRANSCRIPTION_MODEL.encode("utf-8"), None)))

        try:
            async with self._client() as client:
                return await client.post(
                    self.config.TRANSCRIPTION_URL,
                    headers={"Authorization": f"Bearer {self.config.API_KEY}"},
                    files=parts,
                )
        except httpx.HTTPError as e:
            raise UpstreamError(f"Transcription upstream unreachable: {e}") from e

    async def generate_content(self) -> httpx.Response:
        payload = {"contents": [{"parts": [{"text": self.config.GEMINI_PROMPT}]}]}
        try:
            async with self._client() as client:
                return await client.post(
                    self.config.GEMINI_GENERATE_URL,
                    headers={"x-goog-api-key": self.config.GEMINI_API_KEY},
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise UpstreamError(f"Generative content upstream unreachable: {e}") from e


# 逐跳头不转发；httpx 已解压响应体，content-encoding / content-length 由本地重新计算
_SKIPPED_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "trailers",
    "transfer-encoding",
    "upgrade",
    "content-encoding",
    "content-length",
}


def relay_response(upstream: httpx.Response) -> Response:
    if upstream.is_error:
        logger.warning("Upstream %s returned %s", upstream.request.url, upstream.status_code)
    response = Response(content=upstream.content, status_code=upstream.status_code)
    for name, value in upstream.headers.multi_items():
        if name.lower() not in _SKIPPED_HEADERS:
            response.headers.append(name, value)
    return response


passthrough_service = PassthroughService(settings)
