from fastapi import APIRouter, Depends

from app.api import deps
from app.services.passthrough import PassthroughService, relay_response

router = APIRouter()

# 实验性接口：固定 prompt，不属于稳定契约
@router.get("/gemini")
async def generate_content(service: PassthroughService = Depends(deps.get_passthrough_service)):
    upstream = await service.generate_content()
    return relay_response(upstream)
