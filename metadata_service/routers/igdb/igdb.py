from fastapi import APIRouter, Request, status

from metadata_service.dependencies import ActiveIgdb
from metadata_service.logic.handler import handle

router = APIRouter(
    tags=["igdb"],
    responses={status.HTTP_404_NOT_FOUND: {"description": "Not found"}},
)


@router.get("/{method}", status_code=status.HTTP_200_OK)
async def igdb_handler(method: str, request: Request, igdb: ActiveIgdb):
    """
    Game metadata from IGDB.

    - /options?name=... : candidate matches for a free-text name
    - /info?id=... : the fully enriched record of one game
    - /recommendations?id=... : games similar to the given one
    """
    return await handle(igdb, method, request.query_params)
