"""Display helpers for search results: labels, dates, excerpts, link visibility."""

import re
from datetime import datetime
from urllib.parse import quote

from intranet_search.search.aggregator import SearchState
from intranet_search.search.models import (
    RESULT_TYPES,
    ContentType,
    DepartmentRef,
    SearchResultPage,
)

CATEGORY_LABELS: dict[str, str] = {
    "REPORT": "Báo cáo",
    "CONTRACT": "Hợp đồng",
    "GUIDE": "Hướng dẫn",
    "FORM": "Biểu mẫu",
    "OTHER": "Khác",
}

SECTION_TITLES: dict[ContentType, str] = {
    ContentType.ALL: "Tất cả",
    ContentType.DOCUMENTS: "Tài liệu",
    ContentType.EVENTS: "Sự kiện",
    ContentType.ANNOUNCEMENTS: "Thông báo",
    ContentType.POSTS: "Tin tức",
}

COMPANY_WIDE = "Công ty"
NO_RESULTS = "Không tìm thấy kết quả nào."
LOADING = "Đang tìm kiếm..."
RETRY_HINT = "Kiểm tra kết nối rồi thử lại."

_TAG_RE = re.compile(r"<[^>]*>?")


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category)


def department_label(department: DepartmentRef | None) -> str:
    return department.name if department and department.name else COMPANY_WIDE


def format_date(value: datetime | None) -> str:
    if not value:
        return ""
    return value.astimezone().strftime("%d/%m/%Y")


def format_datetime(value: datetime | None) -> str:
    if not value:
        return ""
    return value.astimezone().strftime("%H:%M - %d/%m/%Y")


def post_excerpt(html: str, length: int = 120) -> str:
    """Plain-text preview of a rich-text body."""
    text = _TAG_RE.sub("", html or "")
    return text[:length] + "..."


def view_all_path(content_type: ContentType, query: str) -> str:
    return f"/company/{content_type.value}?search={quote(query, safe='')}"


def show_view_all(
    search_type: ContentType,
    content_type: ContentType,
    results: SearchResultPage | None,
) -> bool:
    """A "view all" link shows only under the matching filter, when more matches exist than were returned."""
    if results is None or content_type == ContentType.ALL or search_type != content_type:
        return False
    return results.pagination.total_for(content_type) > len(results.items(content_type))


def show_pagination(search_type: ContentType, results: SearchResultPage | None) -> bool:
    if results is None or search_type == ContentType.ALL:
        return False
    return results.pagination.total_for(search_type) > results.pagination.limit


def result_summary(total: int, query: str) -> str:
    return f"Tìm thấy {total} kết quả cho “{query}”"


def _section_lines(content_type: ContentType, results: SearchResultPage) -> list[str]:
    lines: list[str] = []
    if content_type == ContentType.DOCUMENTS:
        for doc in results.documents:
            lines.append(f"  • {doc.title}  [{category_label(doc.category)}]")
            if doc.description:
                lines.append(f"      {doc.description}")
            lines.append(
                f"      {department_label(doc.department)} · {format_date(doc.created_at)} · {doc.file_path}"
            )
    elif content_type == ContentType.EVENTS:
        for event in results.events:
            lines.append(f"  • {event.title}")
            lines.append(
                f"      Bắt đầu: {format_datetime(event.start_date)} · "
                f"Địa điểm: {event.location or 'Không xác định'} · {department_label(event.department)}"
            )
    elif content_type == ContentType.ANNOUNCEMENTS:
        for announcement in results.announcements:
            lines.append(f"  • {announcement.title}")
            lines.append(
                f"      {department_label(announcement.department)} · {format_date(announcement.created_at)}"
            )
    elif content_type == ContentType.POSTS:
        for post in results.posts:
            tag = f"  #{post.tags[0]}" if post.tags else ""
            lines.append(f"  • {post.title}{tag}")
            lines.append(f"      {post_excerpt(post.content)}")
            lines.append(
                f"      {department_label(post.department)} · {format_date(post.created_at)}"
            )
    return lines


def render_results(state: SearchState) -> str:
    """Plain-text view of a search state, loading and error states included."""
    if state.loading:
        return LOADING
    if state.error:
        return f"{state.error}\n{RETRY_HINT}"
    if not state.query.strip() or state.results is None:
        return ""
    results = state.results
    if results.is_empty:
        return NO_RESULTS

    blocks: list[str] = []
    if state.search_type == ContentType.ALL and results.pagination.total > 0:
        blocks.append(result_summary(results.pagination.total, state.query))
    for content_type in RESULT_TYPES:
        if state.search_type not in (ContentType.ALL, content_type):
            continue
        if not results.items(content_type):
            continue
        total = results.pagination.total_for(content_type)
        block = [f"{SECTION_TITLES[content_type]} ({total})"]
        block.extend(_section_lines(content_type, results))
        if show_view_all(state.search_type, content_type, results):
            block.append(f"  → Xem tất cả: {view_all_path(content_type, state.query)}")
        blocks.append("\n".join(block))

    if show_pagination(state.search_type, results):
        blocks.append(f"Trang {state.page} / {results.pagination.total_pages}")
    return "\n\n".join(blocks)
