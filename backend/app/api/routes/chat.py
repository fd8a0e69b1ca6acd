import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.api import deps
from app.schemas.chat import ChatRequest, ResponseEnvelope
from app.services.llm_service import LLMService
from app.services.sse import relay_event_stream

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/chat")
async def chat_completions(
    request: ChatRequest = Depends(deps.get_chat_request),
    service: LLMService = Depends(deps.get_llm_service)
):
    """
    与上游模型对话。
    stream=true (默认) 时返回 text/event-stream，否则返回统一包装的完整结果。
    """
    logger.info(f"Chat request: model={request.model} stream={request.stream} messages={len(request.messages)}")

    if request.stream:
        # 建立上游连接失败会在返回响应头之前抛出 UpstreamError
        chunks = await service.open_stream(request)
        return StreamingResponse(
            relay_event_stream(chunks),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
            }
        )

    completion = await service.complete(request)
    return ResponseEnvelope(data=completion)
