import re
from typing import Any, Callable, Union

import httpx
import pytest
import pytest_asyncio

from metadata_service.logic.igdb import IgdbClient

TOKEN_URL = "https://id.twitch.tv/oauth2/token"
API_URL = "https://api.igdb.com/v4"

Route = Union[Any, Callable[[str], Any]]


class FakeUpstream:
    """
    Stand-in for Twitch auth and the IGDB API.

    Routes map an endpoint name to a JSON payload, an ``httpx.Response``, or a
    callable taking the query body and returning either. Unrouted endpoints 404.
    """

    def __init__(self):
        self.routes: dict[str, Route] = {}
        self.calls: list[tuple[str, str]] = []
        self.token_requests = 0
        self.token_status = 200

    def add(self, endpoint: str, route: Route) -> None:
        self.routes[endpoint] = route

    def bodies(self, endpoint: str) -> list[str]:
        return [body for called, body in self.calls if called == endpoint]

    def handler(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == TOKEN_URL:
            self.token_requests += 1
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"message": "invalid client"})
            return httpx.Response(200, json={"access_token": "token", "expires_in": 3600, "token_type": "bearer"})

        endpoint = request.url.path.rsplit("/", 1)[-1]
        body = request.content.decode()
        self.calls.append((endpoint, body))

        route = self.routes.get(endpoint)
        if route is None:
            return httpx.Response(404)
        payload = route(body) if callable(route) else route
        if isinstance(payload, httpx.Response):
            return payload
        return httpx.Response(200, json=payload)


def search_route(results: dict[str, list[dict]]) -> Callable[[str], list[dict]]:
    """Answer IGDB full-text searches from a term -> results table."""
    def route(body: str) -> list[dict]:
        term = re.search(r'search "(.*)";', body).group(1)
        return results.get(term, [])
    return route


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest_asyncio.fixture
async def igdb(upstream):
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)) as client:
        yield IgdbClient(
            client,
            client_id="client-id",
            client_secret="client-secret",
            token_url=TOKEN_URL,
            api_url=API_URL,
        )
