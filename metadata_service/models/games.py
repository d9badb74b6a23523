from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from metadata_service.models.igdb import IgdbInvolvedCompany, IgdbWebsite

EPOCH_DATE = "1970-01-01"


class MediaOption(BaseModel):
    """Lightweight search or recommendation result."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class MediaLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str


class MediaInfo(BaseModel):
    """Fully enriched game record returned by the info operation."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    artworks: list[str] = []
    cover: str = ""
    description: str = ""
    release_date: str = EPOCH_DATE
    critics_score: int = 0
    community_score: int = 0
    genres: list[str] = []
    platforms: list[str] = []
    series: list[str] = []
    creators: list[str] = []
    publishers: list[str] = []
    links: list[MediaLink] = []


class MediaInfoBuilder(BaseModel):
    """
    Mutable record assembled stage by stage while a game is enriched.

    Upstream ids and raw objects live in their own fields and never share a
    field with the resolved names they turn into. ``clear_transitional`` wipes
    them and ``freeze`` refuses to produce a ``MediaInfo`` while any is set.
    """

    # Resolved output
    id: str = ""
    name: str = ""
    artworks: list[str] = Field(default_factory=list)
    cover: str = ""
    description: str = ""
    release_date: str = EPOCH_DATE
    critics_score: int = 0
    community_score: int = 0
    genres: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    series: list[str] = Field(default_factory=list)
    creators: list[str] = Field(default_factory=list)
    publishers: list[str] = Field(default_factory=list)
    links: list[MediaLink] = Field(default_factory=list)

    # Primary fetch ids
    url: Optional[str] = None
    artwork_ids: list[int] = Field(default_factory=list)
    cover_id: Optional[int] = None
    website_ids: list[int] = Field(default_factory=list)
    involved_company_ids: list[int] = Field(default_factory=list)
    genre_ids: list[int] = Field(default_factory=list)
    platform_ids: list[int] = Field(default_factory=list)
    collection_ids: list[int] = Field(default_factory=list)
    franchise_ids: list[int] = Field(default_factory=list)

    # First fan-out
    collection_names: list[str] = Field(default_factory=list)
    franchise_names: list[str] = Field(default_factory=list)
    websites: list[IgdbWebsite] = Field(default_factory=list)
    involved_companies: list[IgdbInvolvedCompany] = Field(default_factory=list)

    # Secondary ids
    creator_ids: list[int] = Field(default_factory=list)
    publisher_ids: list[int] = Field(default_factory=list)
    company_ids: list[int] = Field(default_factory=list)
    website_type_ids: list[int] = Field(default_factory=list)

    # Second fan-out
    companies_map: dict[int, str] = Field(default_factory=dict)
    website_types_map: dict[int, str] = Field(default_factory=dict)

    TRANSITIONAL_FIELDS: ClassVar[tuple[str, ...]] = (
        "url",
        "artwork_ids",
        "cover_id",
        "website_ids",
        "involved_company_ids",
        "genre_ids",
        "platform_ids",
        "collection_ids",
        "franchise_ids",
        "collection_names",
        "franchise_names",
        "websites",
        "involved_companies",
        "creator_ids",
        "publisher_ids",
        "company_ids",
        "website_type_ids",
        "companies_map",
        "website_types_map",
    )

    def clear_transitional(self) -> None:
        fields = type(self).model_fields
        for name in self.TRANSITIONAL_FIELDS:
            setattr(self, name, fields[name].get_default(call_default_factory=True))

    def freeze(self) -> MediaInfo:
        leftover = [name for name in self.TRANSITIONAL_FIELDS if getattr(self, name)]
        if leftover:
            raise RuntimeError(f"Transitional fields still set on {self.id}: {', '.join(leftover)}")
        return MediaInfo(**self.model_dump(include=set(MediaInfo.model_fields)))
