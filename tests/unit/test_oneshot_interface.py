from __future__ import annotations

import pytest

from fakes import ScriptedBackend, make_page
from intranet_search.interfaces.oneshot import run_oneshot
from intranet_search.search.interface import SearchRequestError
from intranet_search.search.models import ContentType


@pytest.mark.asyncio
async def test_run_oneshot_prints_results(capsys):
    backend = ScriptedBackend(lambda q: make_page(documents=2, announcements=1))

    code = await run_oneshot("báo cáo", backend=backend)

    out = capsys.readouterr().out
    assert code == 0
    assert "Tài liệu (2)" in out
    assert len(backend.calls) == 1


@pytest.mark.asyncio
async def test_run_oneshot_requests_filtered_page(capsys):
    backend = ScriptedBackend(
        lambda q: make_page(events=10, page=q.page, totals={"events": 25})
    )

    code = await run_oneshot("hội thảo", search_type="events", page=3, backend=backend)

    assert code == 0
    assert [(c.type, c.page) for c in backend.calls] == [
        (ContentType.EVENTS, 1),
        (ContentType.EVENTS, 3),
    ]
    assert "Trang 3 / 3" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_oneshot_rejects_page_out_of_range(capsys):
    backend = ScriptedBackend(lambda q: make_page(events=1, total_pages=2))

    code = await run_oneshot("hội thảo", search_type="events", page=3, backend=backend)

    assert code == 2
    assert "out of range (1-2)" in capsys.readouterr().out
    assert len(backend.calls) == 1


@pytest.mark.asyncio
async def test_run_oneshot_reports_search_failure(capsys):
    def fail(query):
        raise SearchRequestError("HTTP 500", status_code=500)

    code = await run_oneshot("x", backend=ScriptedBackend(fail))

    assert code == 1
    assert "thử lại" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_oneshot_rejects_empty_query(capsys):
    code = await run_oneshot("   ")
    out = capsys.readouterr().out
    assert code == 2
    assert "must not be empty" in out


@pytest.mark.asyncio
async def test_run_oneshot_rejects_unknown_type(capsys):
    code = await run_oneshot("x", search_type="videos", backend=ScriptedBackend())
    assert code == 2
    assert "unknown type 'videos'" in capsys.readouterr().out
