"""
Detailed game lookup.

The primary IGDB record only carries ids for its artwork, companies, genres
and so on. Those are resolved in two concurrent batches: the first fetches
every directly referenced resource, the second translates the company and
website-type ids that only the first batch reveals. A failing sub-fetch
leaves its field at the default instead of failing the lookup.
"""
import asyncio
import logging
import math
from datetime import datetime, timezone
from functools import partial
from typing import Awaitable, Iterable, Optional, Type, TypeVar

from fastapi import HTTPException, status
from pydantic import BaseModel

from metadata_service.logic.igdb import MAX_PAGE_SIZE, IgdbClient, format_ids
from metadata_service.logic.options import to_media_option
from metadata_service.models.games import EPOCH_DATE, MediaInfo, MediaInfoBuilder, MediaLink
from metadata_service.models.igdb import (
    IgdbGameDetail,
    IgdbImage,
    IgdbInvolvedCompany,
    IgdbNamed,
    IgdbWebsite,
    IgdbWebsiteType,
)

logger = logging.getLogger(__name__)

DETAIL_FIELDS = (
    "aggregated_rating,artworks,collection,collections,cover,first_release_date,"
    "franchise,franchises,genres,involved_companies,name,platforms,rating,summary,url,websites"
)
IMAGE_SIZE = "t_original"
IGDB_LINK_NAME = "IGDB"

RecordT = TypeVar("RecordT", bound=BaseModel)
T = TypeVar("T")


def image_url(url: str) -> str:
    """'//images.igdb.com/.../t_thumb/x.jpg' -> 'https://images.igdb.com/.../t_original/x.jpg'"""
    url = url.replace("t_thumb", IMAGE_SIZE)
    if url.startswith("//"):
        url = f"https:{url}"
    return url


def format_release_date(timestamp: Optional[int]) -> str:
    if timestamp is None:
        return EPOCH_DATE
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date().isoformat()


def score(rating: Optional[float]) -> int:
    # Half rounds up
    return math.floor(rating + 0.5) if rating else 0


def _unique(values: Iterable[int]) -> list[int]:
    return list(dict.fromkeys(values))


async def _best_effort(label: str, fetch: Awaitable[Optional[T]]) -> Optional[T]:
    """Await a sub-fetch; None means degraded and the field keeps its default."""
    try:
        return await fetch
    except Exception as e:
        logger.warning(f"Could not resolve {label}: {type(e).__name__}: {e}")
        return None


async def _fetch_by_ids(
    igdb: IgdbClient,
    headers: dict[str, str],
    endpoint: str,
    model: Type[RecordT],
    fields: str,
    ids: list[int],
) -> Optional[list[RecordT]]:
    if not ids:
        return None
    return await igdb.request(
        endpoint,
        model,
        headers=headers,
        body=f"fields {fields}; where id = {format_ids(ids)}; limit {min(len(ids), MAX_PAGE_SIZE)};",
    )


def seed_record(game: IgdbGameDetail) -> MediaInfoBuilder:
    option = to_media_option(game)
    builder = MediaInfoBuilder(
        id=option.id,
        name=option.name,
        description=game.summary or "",
        critics_score=score(game.aggregated_rating),
        community_score=score(game.rating),
        release_date=format_release_date(game.first_release_date),
        url=game.url,
        artwork_ids=game.artworks,
        cover_id=game.cover,
        website_ids=game.websites,
        involved_company_ids=game.involved_companies,
        genre_ids=game.genres,
        platform_ids=game.platforms,
        collection_ids=game.collections,
        franchise_ids=game.franchises,
    )
    if game.collection is not None and game.collection not in builder.collection_ids:
        builder.collection_ids.append(game.collection)
    if game.franchise is not None and game.franchise not in builder.franchise_ids:
        builder.franchise_ids.append(game.franchise)
    return builder


async def fetch_references(igdb: IgdbClient, headers: dict[str, str], builder: MediaInfoBuilder) -> None:
    """First batch: every resource the primary record points at directly."""
    fetch = partial(_fetch_by_ids, igdb, headers)
    artworks, covers, websites, involved_companies, genres, platforms, collections, franchises = (
        await asyncio.gather(
            _best_effort("artworks", fetch("artworks", IgdbImage, "url", builder.artwork_ids)),
            _best_effort("cover", fetch("covers", IgdbImage, "url", [builder.cover_id] if builder.cover_id else [])),
            _best_effort("websites", fetch("websites", IgdbWebsite, "type,url", builder.website_ids)),
            _best_effort(
                "involved companies",
                fetch("involved_companies", IgdbInvolvedCompany, "company,developer,publisher", builder.involved_company_ids),
            ),
            _best_effort("genres", fetch("genres", IgdbNamed, "name", builder.genre_ids)),
            _best_effort("platforms", fetch("platforms", IgdbNamed, "name", builder.platform_ids)),
            _best_effort("collections", fetch("collections", IgdbNamed, "name", builder.collection_ids)),
            _best_effort("franchises", fetch("franchises", IgdbNamed, "name", builder.franchise_ids)),
        )
    )

    if artworks:
        builder.artworks = [image_url(artwork.url) for artwork in artworks if artwork.url]
    if covers and covers[0].url:
        builder.cover = image_url(covers[0].url)
    if websites:
        builder.websites = websites
    if involved_companies:
        builder.involved_companies = involved_companies
    if genres:
        builder.genres = [genre.name for genre in genres]
    if platforms:
        builder.platforms = [platform.name for platform in platforms]
    if collections:
        builder.collection_names = [collection.name for collection in collections]
    if franchises:
        builder.franchise_names = [franchise.name for franchise in franchises]


def derive_secondary_ids(builder: MediaInfoBuilder) -> None:
    builder.series = builder.franchise_names + builder.collection_names

    companies = [involved for involved in builder.involved_companies if involved.company is not None]
    builder.creator_ids = [involved.company for involved in companies if involved.developer]
    builder.publisher_ids = [involved.company for involved in companies if involved.publisher]
    builder.company_ids = _unique(involved.company for involved in companies)

    builder.website_type_ids = _unique(website.type for website in builder.websites if website.type is not None)


async def fetch_lookups(igdb: IgdbClient, headers: dict[str, str], builder: MediaInfoBuilder) -> None:
    """Second batch: company names and website type labels."""
    fetch = partial(_fetch_by_ids, igdb, headers)
    companies, website_types = await asyncio.gather(
        _best_effort("companies", fetch("companies", IgdbNamed, "name", builder.company_ids)),
        _best_effort("website types", fetch("website_types", IgdbWebsiteType, "type", builder.website_type_ids)),
    )

    if companies:
        builder.companies_map = {company.id: company.name for company in companies}
    if website_types:
        builder.website_types_map = {website_type.id: website_type.type for website_type in website_types}


def fold_names(builder: MediaInfoBuilder) -> None:
    companies = builder.companies_map
    builder.creators = [companies[company_id] for company_id in builder.creator_ids if company_id in companies]
    builder.publishers = [companies[company_id] for company_id in builder.publisher_ids if company_id in companies]

    website_types = builder.website_types_map
    builder.links = [
        MediaLink(name=website_types[website.type], url=website.url)
        for website in builder.websites
        if website.type in website_types
    ]
    builder.links.append(MediaLink(name=IGDB_LINK_NAME, url=builder.url or ""))


async def get_info(igdb: IgdbClient, game_id: str) -> MediaInfo:
    not_found = HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Game {game_id} not found",
    )
    if not (game_id.isascii() and game_id.isdigit()):
        raise not_found

    access_token = await igdb.get_access_token()
    headers = igdb.auth_headers(access_token)

    games = await igdb.request(
        "games",
        IgdbGameDetail,
        headers=headers,
        body=f"fields {DETAIL_FIELDS}; where id = {game_id};",
    )
    if not games:
        raise not_found

    builder = seed_record(games[0])
    await fetch_references(igdb, headers, builder)
    derive_secondary_ids(builder)
    await fetch_lookups(igdb, headers, builder)
    fold_names(builder)
    builder.clear_transitional()

    logger.info(f"Resolved game {builder.id} '{builder.name}'")
    return builder.freeze()
