from fastapi import APIRouter

from app.schemas.catalog import MODEL_CATALOG
from app.schemas.chat import ResponseEnvelope

router = APIRouter()

@router.get("/model/list", response_model=ResponseEnvelope)
def list_models():
    """返回可用模型目录 (静态数据)"""
    return ResponseEnvelope(data=[card.model_dump() for card in MODEL_CATALOG])
