from fastapi import APIRouter

from app.dependencies import GsmArenaDep
from app.mappers.query_formatter import format_query
from app.schemas.gsm import PhoneEntry

router = APIRouter(prefix="/gsm")


@router.get("/search", response_model=list[PhoneEntry])
async def search_phones(service: GsmArenaDep, q: str | None = None) -> list[PhoneEntry]:
    # A failed scrape and an empty result set both come back as 200
    return await service.search(format_query(q))
