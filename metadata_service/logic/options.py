import logging
import re
from datetime import datetime, timezone

from metadata_service.logic.igdb import IgdbClient
from metadata_service.logic.text import to_ascii, to_roman
from metadata_service.models.games import MediaOption
from metadata_service.models.igdb import IgdbGameDetail, IgdbSearchGame

logger = logging.getLogger(__name__)

SEARCH_FIELDS = "id,first_release_date,name"
# Bundles and packs are storefront SKUs rather than standalone games
BAD_WORDS = ("bundle", "pack")
MAX_FALLBACK_DEPTH = 1
# Sequel numbers beyond the classic numeral range are not retried
MAX_FALLBACK_DIGITS = 4
MAX_FALLBACK_NUMBER = 3999

_TRAILING_NUMBER = re.compile(r"(\d+)$")


def release_year(timestamp: int) -> int:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).year


def to_media_option(game: IgdbSearchGame | IgdbGameDetail) -> MediaOption:
    """Stringify the id and append the release year to the name when it is known."""
    name = game.name
    if game.first_release_date:
        name += f" ({release_year(game.first_release_date)})"
    return MediaOption(id=str(game.id), name=name)


def contains_all_words(name: str, query: str) -> bool:
    haystack = to_ascii(name.lower())
    return all(to_ascii(word.lower()) in haystack for word in query.replace(":", "").split())


def filter_games(games: list[IgdbSearchGame], query: str) -> list[IgdbSearchGame]:
    return [
        game for game in games
        if not any(word in game.name.lower() for word in BAD_WORDS)
        and contains_all_words(game.name, query)
    ]


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


async def get_options(igdb: IgdbClient, name: str, depth: int = 0) -> list[MediaOption]:
    """
    Search IGDB by free text and keep the entries whose name holds every query word.

    A trailing number in the query triggers a second search with the number
    written in Roman numerals ("Final Fantasy 7" -> "Final Fantasy VII"),
    and its results are appended.
    """
    access_token = await igdb.get_access_token()
    games = await igdb.request(
        "games",
        IgdbSearchGame,
        headers=igdb.auth_headers(access_token),
        body=f'fields {SEARCH_FIELDS}; search "{_escape(name)}";',
    )
    if games is None:
        return []

    options = [to_media_option(game) for game in filter_games(games, name)]
    logger.debug(f"Search '{name}' kept {len(options)} of {len(games)} games")

    match = _TRAILING_NUMBER.search(name)
    if match and depth < MAX_FALLBACK_DEPTH and len(match.group(1)) <= MAX_FALLBACK_DIGITS:
        number = int(match.group(1))
        roman = to_roman(number) if number <= MAX_FALLBACK_NUMBER else ""
        if roman:
            options.extend(await get_options(igdb, name[:match.start()] + roman, depth + 1))

    return options
