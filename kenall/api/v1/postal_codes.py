from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from kenall.api.deps import get_index
from kenall.services.lookup_service import PostalCodeIndex, parse_postal_code

router = APIRouter()


class PostalRecordOut(BaseModel):
    postal_code: str
    prefecture: str
    city: str
    town: str
    prefecture_kana: str
    city_kana: str
    town_kana: str


class PostalCodeResponse(BaseModel):
    postal_code: str
    items: list[PostalRecordOut]


@router.get("/{code}", response_model=PostalCodeResponse)
async def get_postal_code(code: str, index: PostalCodeIndex = Depends(get_index)):
    postal_code = parse_postal_code(code)
    if postal_code is None:
        raise HTTPException(status_code=422, detail=f"Invalid postal code '{code}'")

    records = index.lookup(postal_code)
    if not records:
        raise HTTPException(status_code=404, detail=f"Postal code '{postal_code}' not found")

    return PostalCodeResponse(
        postal_code=postal_code,
        items=[PostalRecordOut(**{f: getattr(r, f) for f in PostalRecordOut.model_fields}) for r in records],
    )
