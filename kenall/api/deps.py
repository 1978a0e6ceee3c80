from fastapi import HTTPException, Request

from kenall.services.lookup_service import PostalCodeIndex


def get_index(request: Request) -> PostalCodeIndex:
    index = request.app.state.index
    if index is None:
        raise HTTPException(status_code=503, detail="Index not loaded")
    return index
