import pytest
from pydantic import ValidationError

from fakes import make_page
from intranet_search.search.models import (
    ContentType,
    PaginationInfo,
    PostSummary,
    SearchQuery,
    SearchResultPage,
)


def test_query_rejects_page_below_one():
    with pytest.raises(ValueError):
        SearchQuery("x", page=0)


def test_with_type_resets_page():
    query = SearchQuery("x", ContentType.ALL, 4)

    assert query.with_type(ContentType.EVENTS) == SearchQuery("x", ContentType.EVENTS, 1)
    assert query.with_page(2).type == ContentType.ALL


def test_empty_result_set_has_zeroed_pagination():
    empty = SearchResultPage.empty(limit=20)

    assert empty.is_empty
    assert empty.pagination.page == 1
    assert empty.pagination.limit == 20
    assert empty.pagination.total == 0
    assert empty.pagination.total_pages == 0


def test_total_for_each_content_type():
    pagination = PaginationInfo(
        total=9,
        total_documents=2,
        total_events=3,
        total_announcements=1,
        total_posts=3,
    )

    assert pagination.total_for(ContentType.ALL) == 9
    assert pagination.total_for(ContentType.DOCUMENTS) == 2
    assert pagination.total_for(ContentType.EVENTS) == 3
    assert pagination.total_for(ContentType.ANNOUNCEMENTS) == 1
    assert pagination.total_for(ContentType.POSTS) == 3


def test_items_mixes_types_for_all():
    page = make_page(documents=1, events=2, posts=1)

    assert len(page.items(ContentType.ALL)) == 4
    assert [e.id for e in page.items(ContentType.EVENTS)] == ["e0", "e1"]


def test_models_are_read_only():
    post = PostSummary(id="p1", title="Hello", tags=["news"])

    with pytest.raises(ValidationError):
        post.title = "changed"


def test_unknown_category_is_kept_verbatim():
    page = SearchResultPage.model_validate(
        {
            "documents": [{"id": "d", "title": "t", "category": "POLICY"}],
            "pagination": {"page": 1, "limit": 10},
        }
    )

    assert page.documents[0].category == "POLICY"


def test_pagination_rejects_negative_totals():
    with pytest.raises(ValidationError):
        PaginationInfo(total=-1)
