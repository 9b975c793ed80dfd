from typing import Annotated

from fastapi import Depends, Request

from app.services.gsmarena import GsmArenaService


def get_gsmarena_service(request: Request) -> GsmArenaService:
    return request.app.state.gsmarena_service


GsmArenaDep = Annotated[GsmArenaService, Depends(get_gsmarena_service)]
