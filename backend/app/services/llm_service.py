import logging
from typing import Any, AsyncIterator, Dict, Optional

import httpx
import openai
from openai import AsyncOpenAI

from app.core.config import settings
from app.core.errors import StreamError, UpstreamError
from app.schemas.chat import ChatRequest

logger = logging.getLogger(__name__)

# SDK 对上游异常统一包装为 OpenAIError；流式读取中途断开时 httpx 的异常可能直接抛出
_UPSTREAM_FAILURES = (openai.OpenAIError, httpx.HTTPError, ValueError)


class LLMService:
    def __init__(self, base_url: str, api_key: str):
        self.base_url = base_url
        self.api_key = api_key
        # 首次调用时才创建客户端，缺少凭证不影响应用启动
        self.client: Optional[AsyncOpenAI] = None

    def _get_client(self) -> AsyncOpenAI:
        if self.client is None:
            # 连接池由 SDK 自行管理；缺少凭证时 SDK 抛出 OpenAIError
            self.client = AsyncOpenAI(
                base_url=self.base_url,
                api_key=self.api_key
            )
        return self.client

    async def complete(self, request: ChatRequest) -> Dict[str, Any]:
        """
        非流式对话：等待上游返回完整的 completion 对象
        """
        params = request.completion_params()
        params["stream"] = False
        try:
            response = await self._get_client().chat.completions.create(**params)
            return response.model_dump(exclude_unset=True)
        except _UPSTREAM_FAILURES as e:
            raise UpstreamError(f"Chat completion failed ({request.model}): {e}") from e

    async def open_stream(self, request: ChatRequest) -> AsyncIterator[Dict[str, Any]]:
        """
        发起流式对话，返回按上游顺序逐个产出 chunk 的异步迭代器。
        建立连接阶段的失败抛出 UpstreamError，读取阶段的失败抛出 StreamError。
        """
        params = request.completion_params()
        params["stream"] = True
        try:
            stream = await self._get_client().chat.completions.create(**params)
        except _UPSTREAM_FAILURES as e:
            raise UpstreamError(f"Chat stream failed to open ({request.model}): {e}") from e
        return self._iter_chunks(stream)

    async def _iter_chunks(self, stream) -> AsyncIterator[Dict[str, Any]]:
        try:
            async for chunk in stream:
                yield chunk.model_dump(exclude_unset=True)
        except _UPSTREAM_FAILURES as e:
            raise StreamError(f"Upstream stream interrupted: {e}") from e
        finally:
            # 客户端断开或异常时释放上游连接
            await stream.close()


# 单例模式导出
llm_service = LLMService(
    base_url=settings.LLM_BASE_URL,
    api_key=settings.API_KEY
)
