from fastapi import APIRouter, Depends, Request

from app.api import deps
from app.services.passthrough import PassthroughService, relay_response

router = APIRouter()

@router.post("/transcriptions")
async def transcribe(
    request: Request,
    service: PassthroughService = Depends(deps.get_passthrough_service)
):
    """
    语音转写透传：附加固定模型和凭证后转发 multipart 表单，原样返回上游结果。
    """
    form = await request.form()
    try:
        upstream = await service.forward_transcription(form)
    finally:
        await form.close()
    return relay_response(upstream)
