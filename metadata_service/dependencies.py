from typing import Annotated

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from metadata_service.logic.igdb import IgdbClient


async def get_client(request: HTTPConnection) -> httpx.AsyncClient:
    return request.state.client


ActiveClient = Annotated[httpx.AsyncClient, Depends(get_client)]


async def get_igdb(client: ActiveClient) -> IgdbClient:
    return IgdbClient(client)


ActiveIgdb = Annotated[IgdbClient, Depends(get_igdb)]
