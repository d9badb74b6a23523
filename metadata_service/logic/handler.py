from typing import Any, Mapping

from fastapi import HTTPException, status

from metadata_service.logic.igdb import IgdbClient
from metadata_service.logic.info import get_info
from metadata_service.logic.options import get_options
from metadata_service.logic.recommendations import get_recommendations

# Query parameter each operation reads
PARAMETERS = {
    "options": "name",
    "info": "id",
    "recommendations": "id",
}


async def handle(igdb: IgdbClient, method: str, query: Mapping[str, str]) -> Any:
    """Dispatch a named operation to its resolver."""
    resolvers = {
        "options": get_options,
        "info": get_info,
        "recommendations": get_recommendations,
    }
    if method not in resolvers:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invalid endpoint! Use /[options|info|recommendations]",
        )

    param = query.get(PARAMETERS[method])
    if param is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing parameter for the {method} endpoint",
        )

    return await resolvers[method](igdb, param)
