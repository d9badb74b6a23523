import logging

from metadata_service.logic.igdb import MAX_PAGE_SIZE, IgdbClient, format_ids
from metadata_service.logic.options import SEARCH_FIELDS, to_media_option
from metadata_service.models.games import MediaOption
from metadata_service.models.igdb import IgdbSearchGame, IgdbSimilarGames

logger = logging.getLogger(__name__)


async def get_recommendations(igdb: IgdbClient, game_id: str) -> list[MediaOption]:
    """IGDB's similar games for ``game_id``, leaving out versions and sub-editions."""
    if not (game_id.isascii() and game_id.isdigit()):
        logger.info(f"Ignoring recommendations for non-numeric id '{game_id}'")
        return []

    access_token = await igdb.get_access_token()
    headers = igdb.auth_headers(access_token)

    response = await igdb.request(
        "games",
        IgdbSimilarGames,
        headers=headers,
        body=f"fields similar_games; where id = {game_id};",
    )
    if not response or not response[0].similar_games:
        return []

    ids = response[0].similar_games
    similar_games = await igdb.request(
        "games",
        IgdbSearchGame,
        headers=headers,
        body=(
            f"fields {SEARCH_FIELDS}; "
            f"where id = {format_ids(ids)} & version_parent = null & parent_game = null; "
            f"limit {min(len(ids), MAX_PAGE_SIZE)};"
        ),
    )
    if not similar_games:
        return []

    return [to_media_option(game) for game in similar_games]
