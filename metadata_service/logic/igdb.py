"""IGDB access: Twitch credential exchange and the single-query executor."""
import logging
from typing import Iterable, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter

from metadata_service.core.config import settings
from metadata_service.models.igdb import IgdbAccessToken

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

# Largest page IGDB will return for one query
MAX_PAGE_SIZE = 500


def format_ids(ids: Iterable[int | str]) -> str:
    """IGDB set-membership filter. A single id stays bare, several become '(1,2,3)'."""
    values = [str(value) for value in ids]
    if len(values) == 1:
        return values[0]
    return f"({','.join(values)})"


class IgdbClient:
    """Thin async wrapper over the IGDB v4 query API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        token_url: Optional[str] = None,
        api_url: Optional[str] = None,
    ):
        self._client = client
        self._client_id = settings.IGDB_ID if client_id is None else client_id
        self._client_secret = settings.IGDB_SECRET if client_secret is None else client_secret
        self._token_url = token_url or settings.IGDB_TOKEN_URL
        self._api_url = (api_url or settings.IGDB_API_URL).rstrip("/")

    def auth_headers(self, access_token: str) -> dict[str, str]:
        return {
            "Client-ID": self._client_id,
            "Authorization": f"Bearer {access_token}",
        }

    async def get_access_token(self) -> str:
        """
        Exchange the client credentials for a bearer token.
        Any failure yields an empty token; the next query then fails on its own.
        """
        params = {
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "grant_type": "client_credentials",
        }
        try:
            response = await self._client.post(self._token_url, data=params)
            if not response.is_success:
                logger.warning(f"IGDB token exchange returned status {response.status_code}")
                return ""
            return IgdbAccessToken.model_validate(response.json()).access_token
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"IGDB token exchange failed: {type(e).__name__}: {e}")
            return ""

    async def request(
        self,
        endpoint: str,
        model: Type[RecordT],
        *,
        headers: dict[str, str],
        body: str,
    ) -> Optional[list[RecordT]]:
        """
        Run one IGDB query and parse the JSON array into ``model`` records.
        Returns None on a non-success status, a transport error or an unreadable payload.
        """
        url = f"{self._api_url}/{endpoint}"
        try:
            response = await self._client.post(url, headers=headers, content=body)
        except httpx.HTTPError as e:
            logger.warning(f"IGDB {endpoint} request failed: {type(e).__name__}: {e}")
            return None

        if not response.is_success:
            logger.warning(f"IGDB {endpoint} returned status {response.status_code} for query: {body}")
            return None

        try:
            return TypeAdapter(list[model]).validate_python(response.json())
        except ValueError as e:
            logger.warning(f"Unexpected IGDB {endpoint} payload: {e}")
            return None
