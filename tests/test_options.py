import httpx
import pytest

from metadata_service.logic.options import (
    MAX_FALLBACK_DEPTH,
    contains_all_words,
    get_options,
    to_media_option,
)
from metadata_service.models.games import MediaOption
from metadata_service.models.igdb import IgdbSearchGame
from tests.conftest import search_route

# 2009-10-13, 1997-01-31 and 2018-01-25 at midnight UTC
BORDERLANDS_RELEASE = 1255392000
FF7_RELEASE = 854668800
CELESTE_RELEASE = 1516838400


def test_to_media_option_appends_release_year():
    game = IgdbSearchGame(id=26226, name="Celeste", first_release_date=CELESTE_RELEASE)
    assert to_media_option(game) == MediaOption(id="26226", name="Celeste (2018)")


def test_to_media_option_without_release_date():
    assert to_media_option(IgdbSearchGame(id=5, name="Unreleased")) == MediaOption(id="5", name="Unreleased")


def test_to_media_option_uses_utc_year():
    # 2019-12-31 23:30 UTC is already 2020 east of Greenwich
    game = IgdbSearchGame(id=1, name="Edge", first_release_date=1577835000)
    assert to_media_option(game).name == "Edge (2019)"


@pytest.mark.parametrize(
    "name, query, expected",
    [
        ("Mass Effect 2", "Mass Effect", True),
        ("Mass", "Mass Effect", False),
        ("Pokémon Red Version", "pokemon red", True),
        ("Pokemon Go", "Pokémon", True),
        ("The Legend of Zelda: Breath of the Wild", "Zelda: Breath", True),
        ("HALO INFINITE", "halo   infinite", True),
        ("Celeste", "Celeste Classic", False),
    ],
)
def test_contains_all_words(name, query, expected):
    assert contains_all_words(name, query) is expected


@pytest.mark.asyncio
async def test_get_options_excludes_bundles_and_packs(igdb, upstream):
    upstream.add("games", search_route({
        "Borderlands": [
            {"id": 1, "name": "Borderlands", "first_release_date": BORDERLANDS_RELEASE},
            {"id": 2, "name": "Borderlands Bundle"},
            {"id": 3, "name": "Borderlands: Triple Pack"},
        ],
    }))

    options = await get_options(igdb, "Borderlands")

    assert options == [MediaOption(id="1", name="Borderlands (2009)")]


@pytest.mark.asyncio
async def test_get_options_requires_every_query_word(igdb, upstream):
    upstream.add("games", search_route({
        "Mass Effect": [
            {"id": 10, "name": "Mass"},
            {"id": 11, "name": "Mass Effect 2"},
            {"id": 12, "name": "Effect and Cause"},
        ],
    }))

    options = await get_options(igdb, "Mass Effect")

    assert options == [MediaOption(id="11", name="Mass Effect 2")]


@pytest.mark.asyncio
async def test_get_options_sends_search_query(igdb, upstream):
    upstream.add("games", search_route({}))

    await get_options(igdb, "Celeste")

    assert upstream.bodies("games") == ['fields id,first_release_date,name; search "Celeste";']


@pytest.mark.asyncio
async def test_get_options_escapes_quotes(igdb, upstream):
    upstream.add("games", [])

    await get_options(igdb, 'The "Game"')

    assert upstream.bodies("games") == ['fields id,first_release_date,name; search "The \\"Game\\"";']


@pytest.mark.asyncio
async def test_get_options_trailing_number_also_searches_roman_numeral(igdb, upstream):
    upstream.add("games", search_route({
        "Final Fantasy 7": [
            {"id": 100, "name": "Final Fantasy 7 Fan Remake"},
            {"id": 427, "name": "Final Fantasy VII", "first_release_date": FF7_RELEASE},
        ],
        "Final Fantasy VII": [
            {"id": 427, "name": "Final Fantasy VII", "first_release_date": FF7_RELEASE},
            {"id": 428, "name": "Final Fantasy VIII"},
        ],
    }))

    options = await get_options(igdb, "Final Fantasy 7")

    assert options == [
        MediaOption(id="100", name="Final Fantasy 7 Fan Remake"),
        MediaOption(id="427", name="Final Fantasy VII (1997)"),
        MediaOption(id="428", name="Final Fantasy VIII"),
    ]
    assert [body.split('"')[1] for body in upstream.bodies("games")] == ["Final Fantasy 7", "Final Fantasy VII"]
    # The nested search acquires its own token
    assert upstream.token_requests == 2


@pytest.mark.asyncio
async def test_get_options_replaces_only_the_trailing_number(igdb, upstream):
    upstream.add("games", search_route({}))

    await get_options(igdb, "2 Fast 2")

    assert [body.split('"')[1] for body in upstream.bodies("games")] == ["2 Fast 2", "2 Fast II"]


@pytest.mark.asyncio
async def test_get_options_without_trailing_number_searches_once(igdb, upstream):
    upstream.add("games", search_route({"Celeste": [{"id": 26226, "name": "Celeste"}]}))

    options = await get_options(igdb, "Celeste")

    assert options == [MediaOption(id="26226", name="Celeste")]
    assert len(upstream.bodies("games")) == 1


@pytest.mark.asyncio
async def test_get_options_trailing_zero_does_not_recurse(igdb, upstream):
    upstream.add("games", search_route({}))

    await get_options(igdb, "Episode 0")

    assert len(upstream.bodies("games")) == 1


@pytest.mark.asyncio
async def test_get_options_fallback_stops_at_max_depth(igdb, upstream):
    upstream.add("games", search_route({}))

    await get_options(igdb, "Final Fantasy 7", depth=MAX_FALLBACK_DEPTH)

    assert len(upstream.bodies("games")) == 1


@pytest.mark.asyncio
async def test_get_options_empty_search_still_tries_roman_numeral(igdb, upstream):
    upstream.add("games", search_route({
        "Hitman 2": [],
        "Hitman II": [{"id": 9, "name": "Hitman II: Silent Assassin"}],
    }))

    options = await get_options(igdb, "Hitman 2")

    assert options == [MediaOption(id="9", name="Hitman II: Silent Assassin")]


@pytest.mark.asyncio
async def test_get_options_failed_search_is_empty(igdb, upstream):
    upstream.add("games", httpx.Response(500))

    assert await get_options(igdb, "Celeste") == []


@pytest.mark.asyncio
async def test_get_options_rejected_token_is_empty(igdb, upstream):
    upstream.token_status = 400
    upstream.add("games", httpx.Response(401))

    assert await get_options(igdb, "Celeste") == []
    assert upstream.bodies("games") == ['fields id,first_release_date,name; search "Celeste";']


@pytest.mark.asyncio
async def test_get_options_very_long_trailing_number_searches_once(igdb, upstream):
    name = "Game " + "1" * 5000
    upstream.add("games", search_route({name: [{"id": 7, "name": name}]}))

    options = await get_options(igdb, name)

    assert options == [MediaOption(id="7", name=name)]
    assert len(upstream.bodies("games")) == 1


@pytest.mark.asyncio
async def test_get_options_number_beyond_numeral_range_searches_once(igdb, upstream):
    upstream.add("games", search_route({}))

    await get_options(igdb, "Game 20000000")

    assert upstream.bodies("games") == ['fields id,first_release_date,name; search "Game 20000000";']


@pytest.mark.asyncio
async def test_get_options_largest_numeral_still_falls_back(igdb, upstream):
    upstream.add("games", search_route({}))

    await get_options(igdb, "Game 3999")

    assert [body.split('"')[1] for body in upstream.bodies("games")] == ["Game 3999", "Game MMMCMXCIX"]
