from fastapi import APIRouter

from clinic_desk.schemas.sche_base import ResponseSchemaBase

router = APIRouter()


@router.get("", response_model=ResponseSchemaBase)
async def get():
    return ResponseSchemaBase().success_response()
