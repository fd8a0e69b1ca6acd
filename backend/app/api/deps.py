import logging
from typing import Any, Dict, List

import pydantic
from fastapi import Request

from app.core.errors import ValidationError
from app.schemas.chat import ChatRequest
from app.services.llm_service import LLMService, llm_service
from app.services.passthrough import PassthroughService, passthrough_service

logger = logging.getLogger(__name__)

# 与前端约定的中文提示，其余违规项沿用 pydantic 的描述
_VIOLATION_MESSAGES = {
    ("messages", "too_short"): "至少需要一条消息",
    ("content", "string_too_short"): "消息内容不能为空",
}


def describe_violation(error: Dict[str, Any]) -> str:
    loc = error.get("loc", ())
    path = ".".join(str(part) for part in loc)
    field = next((part for part in reversed(loc) if isinstance(part, str)), "")
    message = _VIOLATION_MESSAGES.get((field, error["type"]), error["msg"])
    return f"{path}: {message}" if path else message


def validate_chat_request(body: bytes) -> ChatRequest:
    """
    校验原始请求体：
    1. 解析 JSON
    2. 按 ChatRequest 约束逐项检查，并补齐默认值
    3. 任一约束不满足时抛出 ValidationError，包含全部违规项
    """
    try:
        return ChatRequest.model_validate_json(body or b"")
    except pydantic.ValidationError as e:
        violations: List[str] = [describe_violation(err) for err in e.errors()]
        raise ValidationError(violations) from None


async def get_chat_request(request: Request) -> ChatRequest:
    """
    依赖注入函数：读取请求体并返回校验通过的 ChatRequest
    """
    body = await request.body()
    try:
        return validate_chat_request(body)
    except ValidationError as e:
        logger.warning("Rejected chat request: %s", e.message)
        raise


def get_llm_service() -> LLMService:
    return llm_service


def get_passthrough_service() -> PassthroughService:
    return passthrough_service
