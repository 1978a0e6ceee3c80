import io

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from kenall.api.deps import get_index
from kenall.services.lookup_service import PostalCodeIndex
from kenall.utils.ken_all_csv import write_records

router = APIRouter()


@router.get("/postal-codes.csv")
async def export_postal_codes_csv(
    prefecture: str | None = None,
    city: str | None = None,
    index: PostalCodeIndex = Depends(get_index),
):
    """Export normalized records as CSV, optionally filtered by prefecture/city."""
    output = io.StringIO()
    write_records(index.filter(prefecture=prefecture, city=city), output)
    output.seek(0)

    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=postal_codes.csv"},
    )
