from enum import Enum
from typing import List


class ErrorType(Enum):
    INPUT_ERROR = "input_error"
    UPSTREAM_ERROR = "upstream_error"
    STREAM_ERROR = "stream_error"


# 返回给调用方的通用错误信息，上游细节只写日志
INTERNAL_ERROR_MESSAGE = "服务器内部错误"


class GatewayError(Exception):
    """
    网关错误基类
    """
    error_type: ErrorType = ErrorType.UPSTREAM_ERROR


class ValidationError(GatewayError):
    """
    请求体校验失败，携带全部违规项，对应 HTTP 400
    """
    error_type = ErrorType.INPUT_ERROR

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return "; ".join(self.violations)


class UpstreamError(GatewayError):
    """
    上游服务调用失败 (网络错误、非 2xx、响应格式异常)，对应 HTTP 500
    """
    error_type = ErrorType.UPSTREAM_ERROR


class StreamError(GatewayError):
    """
    流式输出开始后发生的错误，连接直接中断，不发送 [DONE]
    """
    error_type = ErrorType.STREAM_ERROR
