from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt
from typing import Any, List, Literal

from app.core.config import settings

class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant", "system"]
    content: str = Field(min_length=1)

class ChatRequest(BaseModel):
    model: str = Field(default_factory=lambda: settings.DEFAULT_CHAT_MODEL)
    messages: List[ChatMessage] = Field(min_length=1)
    stream: StrictBool = True
    # 缺省时为 None；显式 null、字符串、布尔值均不合法
    temperature: StrictFloat = Field(default=None, ge=0, le=2)
    max_tokens: StrictInt = Field(default=None, ge=1, le=4000)
    top_p: StrictFloat = Field(default=None, ge=0, le=1)

    def completion_params(self) -> dict:
        """转换为 OpenAI SDK 的 chat.completions.create 参数，未设置的可选项不发送"""
        params = {
            "model": self.model,
            "messages": [msg.model_dump() for msg in self.messages],
            "stream": self.stream,
        }
        for key in ("temperature", "max_tokens", "top_p"):
            value = getattr(self, key)
            if value is not None:
                params[key] = value
        return params

# 非流式成功响应的统一包装
class ResponseEnvelope(BaseModel):
    code: int = 200
    data: Any = None
    message: str = "success"
    redirect_url: str = ""
    toast: int = 0
    type: str = "success"
