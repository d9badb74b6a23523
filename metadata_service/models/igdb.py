"""Records as returned by the IGDB v4 API, trimmed to the fields the service requests."""
from typing import Optional

from pydantic import BaseModel


class IgdbAccessToken(BaseModel):
    access_token: str
    expires_in: Optional[int] = None
    token_type: Optional[str] = None


class IgdbSearchGame(BaseModel):
    id: int
    name: str = ""
    first_release_date: Optional[int] = None


class IgdbSimilarGames(BaseModel):
    id: Optional[int] = None
    similar_games: list[int] = []


class IgdbGameDetail(BaseModel):
    id: int
    name: str = ""
    aggregated_rating: Optional[float] = None
    rating: Optional[float] = None
    artworks: list[int] = []
    cover: Optional[int] = None
    collection: Optional[int] = None
    collections: list[int] = []
    franchise: Optional[int] = None
    franchises: list[int] = []
    genres: list[int] = []
    platforms: list[int] = []
    involved_companies: list[int] = []
    websites: list[int] = []
    first_release_date: Optional[int] = None
    summary: Optional[str] = None
    url: Optional[str] = None


class IgdbImage(BaseModel):
    """Artwork or cover. ``url`` is protocol-relative and points at the thumbnail size."""
    id: int
    url: str = ""


class IgdbNamed(BaseModel):
    """Genre, platform, collection, franchise or company."""
    id: int
    name: str = ""


class IgdbWebsite(BaseModel):
    id: int
    url: str = ""
    type: Optional[int] = None


class IgdbInvolvedCompany(BaseModel):
    id: int
    company: Optional[int] = None
    developer: bool = False
    publisher: bool = False


class IgdbWebsiteType(BaseModel):
    id: int
    type: str = ""
