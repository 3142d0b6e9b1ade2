"""Search query and result models for the portal's unified search endpoint."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContentType(StrEnum):
    ALL = "all"
    DOCUMENTS = "documents"
    EVENTS = "events"
    ANNOUNCEMENTS = "announcements"
    POSTS = "posts"


# Content types that map to a result list; ALL is a filter, not a list.
RESULT_TYPES: tuple[ContentType, ...] = (
    ContentType.DOCUMENTS,
    ContentType.EVENTS,
    ContentType.ANNOUNCEMENTS,
    ContentType.POSTS,
)


@dataclass(frozen=True)
class SearchQuery:
    """One settled search input: what gets sent to the backend."""

    text: str
    type: ContentType = ContentType.ALL
    page: int = 1

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")

    def with_type(self, content_type: ContentType) -> SearchQuery:
        return replace(self, type=content_type, page=1)

    def with_page(self, page: int) -> SearchQuery:
        return replace(self, page=page)


class PortalModel(BaseModel):
    """Read-only projection of a backend payload; accepts camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class DepartmentRef(PortalModel):
    id: str
    name: str


class UserRef(PortalModel):
    id: str
    name: str = ""
    email: str | None = None


class DocumentSummary(PortalModel):
    id: str
    title: str
    description: str | None = None
    category: str = Field(default="OTHER", description="REPORT, CONTRACT, GUIDE, FORM or OTHER")
    file_path: str = ""
    is_public: bool = False
    created_at: datetime | None = None
    department: DepartmentRef | None = None
    uploaded_by: UserRef | None = None


class EventSummary(PortalModel):
    id: str
    title: str
    description: str | None = None
    location: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_public: bool = False
    department: DepartmentRef | None = None
    created_by: UserRef | None = None


class AnnouncementSummary(PortalModel):
    id: str
    title: str
    content: str = ""
    created_at: datetime | None = None
    is_public: bool = False
    department: DepartmentRef | None = None
    created_by: UserRef | None = None


class PostSummary(PortalModel):
    id: str
    title: str
    content: str = Field(default="", description="Rich-text HTML body")
    tags: list[str] = Field(default_factory=list)
    cover_image: str | None = None
    created_at: datetime | None = None
    department: DepartmentRef | None = None
    author: UserRef | None = None


class PaginationInfo(PortalModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    total: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)
    total_documents: int = Field(default=0, ge=0)
    total_events: int = Field(default=0, ge=0)
    total_announcements: int = Field(default=0, ge=0)
    total_posts: int = Field(default=0, ge=0)

    def total_for(self, content_type: ContentType) -> int:
        """Total matches for one content type, or the combined total for ALL."""
        if content_type == ContentType.ALL:
            return self.total
        return getattr(self, f"total_{content_type.value}")


class SearchResultPage(PortalModel):
    documents: list[DocumentSummary] = Field(default_factory=list)
    events: list[EventSummary] = Field(default_factory=list)
    announcements: list[AnnouncementSummary] = Field(default_factory=list)
    posts: list[PostSummary] = Field(default_factory=list)
    pagination: PaginationInfo

    @classmethod
    def empty(cls, limit: int = 10) -> SearchResultPage:
        return cls(pagination=PaginationInfo(page=1, limit=limit))

    def items(self, content_type: ContentType) -> list[PortalModel]:
        if content_type == ContentType.ALL:
            return [*self.documents, *self.events, *self.announcements, *self.posts]
        return list(getattr(self, content_type.value))

    @property
    def is_empty(self) -> bool:
        return not (self.documents or self.events or self.announcements or self.posts)
