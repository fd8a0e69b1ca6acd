import asyncio
import json
import logging
from typing import Any, AsyncIterator

from app.core.errors import StreamError

logger = logging.getLogger(__name__)

DONE_FRAME = b"data: [DONE]\n\n"


def encode_frame(chunk: Any) -> bytes:
    return f"data: {json.dumps(chunk, ensure_ascii=False)}\n\n".encode("utf-8")


async def relay_event_stream(chunks: AsyncIterator[Any]) -> AsyncIterator[bytes]:
    """
    把上游 chunk 迭代器转换为 text/event-stream 字节流。

    每个 chunk 按到达顺序编码为一帧；正常结束后追加 [DONE]。
    上游出错时不再输出任何帧，异常继续向上抛出，由服务器直接中断连接。
    下一帧只在上一帧被传输层接收后才会拉取。
    """
    try:
        async for chunk in chunks:
            yield encode_frame(chunk)
    except (GeneratorExit, asyncio.CancelledError):
        logger.info("Client disconnected, stopping event stream")
        raise
    except StreamError:
        logger.exception("Event stream aborted")
        raise
    except Exception as e:
        logger.exception("Event stream aborted")
        raise StreamError(str(e)) from e
    else:
        yield DONE_FRAME
    finally:
        # 客户端断开时 StreamingResponse 会关闭本生成器，这里同步关闭上游迭代器
        aclose = getattr(chunks, "aclose", None)
        if aclose is not None:
            await aclose()
