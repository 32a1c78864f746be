import asyncio

import httpx
import pytest
import respx

from app.services.listing_accumulator import (
    STATUS_BUSY,
    STATUS_EXHAUSTED,
    STATUS_FAILED,
    STATUS_LOADED,
    ListingAccumulator,
)
from tests.conftest import make_pagination, make_summary_doc

PAGE_2 = "https://cms.test/page/2"
PAGE_3 = "https://cms.test/page/3"


def _run(scenario):
    async def runner():
        async with httpx.AsyncClient() as http:
            return await scenario(http)

    return asyncio.run(runner())


def test_initialize_takes_first_page():
    accumulator = ListingAccumulator(http=None)
    accumulator.initialize(make_pagination("a", next_page=PAGE_2))

    assert [p.uid for p in accumulator.posts] == ["a"]
    assert accumulator.next_page == PAGE_2
    assert accumulator.has_more is True


def test_initialize_runs_once():
    accumulator = ListingAccumulator(http=None)
    accumulator.initialize(make_pagination("a"))

    with pytest.raises(RuntimeError):
        accumulator.initialize(make_pagination("b"))


@respx.mock
def test_sequential_load_more_appends_in_call_order():
    respx.get(PAGE_2).mock(
        return_value=httpx.Response(
            200,
            json={
                "results": [make_summary_doc("b"), make_summary_doc("c")],
                "next_page": PAGE_3,
            },
        )
    )
    respx.get(PAGE_3).mock(
        return_value=httpx.Response(
            200, json={"results": [make_summary_doc("d")], "next_page": None}
        )
    )

    async def scenario(http):
        accumulator = ListingAccumulator(http)
        accumulator.initialize(make_pagination("a", next_page=PAGE_2))
        first = await accumulator.load_more()
        assert accumulator.next_page == PAGE_3
        second = await accumulator.load_more()
        return accumulator, first, second

    accumulator, first, second = _run(scenario)

    assert (first.status, first.added) == (STATUS_LOADED, 2)
    assert (second.status, second.added) == (STATUS_LOADED, 1)
    assert [p.uid for p in accumulator.posts] == ["a", "b", "c", "d"]
    assert accumulator.next_page is None
    assert accumulator.has_more is False


@respx.mock
def test_load_more_to_empty_next_page_hides_further_loading():
    respx.get(PAGE_2).mock(
        return_value=httpx.Response(
            200, json={"results": [make_summary_doc("post-b")], "next_page": ""}
        )
    )

    async def scenario(http):
        accumulator = ListingAccumulator(http)
        accumulator.initialize(make_pagination("post-a", next_page=PAGE_2))
        await accumulator.load_more()
        return accumulator, await accumulator.load_more()

    accumulator, again = _run(scenario)

    assert [p.uid for p in accumulator.posts] == ["post-a", "post-b"]
    assert accumulator.has_more is False
    assert again.status == STATUS_EXHAUSTED


def test_load_more_without_next_page_issues_no_request():
    async def scenario(http):
        accumulator = ListingAccumulator(http)
        accumulator.initialize(make_pagination("a"))
        return accumulator, await accumulator.load_more()

    with respx.mock(assert_all_called=False) as mock:
        accumulator, result = _run(scenario)
        assert mock.calls.call_count == 0

    assert result.status == STATUS_EXHAUSTED
    assert [p.uid for p in accumulator.posts] == ["a"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json=["not", "an", "envelope"]),
    ],
)
def test_failed_load_more_leaves_state_unchanged(response):
    async def scenario(http):
        accumulator = ListingAccumulator(http)
        accumulator.initialize(make_pagination("a", next_page=PAGE_2))
        return accumulator, await accumulator.load_more()

    with respx.mock:
        respx.get(PAGE_2).mock(return_value=response)
        accumulator, result = _run(scenario)

    assert result.status == STATUS_FAILED
    assert result.ok is False
    assert result.error
    assert [p.uid for p in accumulator.posts] == ["a"]
    assert accumulator.next_page == PAGE_2


@respx.mock
def test_transport_error_is_reported_as_failure():
    respx.get(PAGE_2).mock(side_effect=httpx.ConnectError("refused"))

    async def scenario(http):
        accumulator = ListingAccumulator(http)
        accumulator.initialize(make_pagination("a", next_page=PAGE_2))
        return accumulator, await accumulator.load_more()

    accumulator, result = _run(scenario)

    assert result.status == STATUS_FAILED
    assert accumulator.next_page == PAGE_2


def test_overlapping_load_more_is_rejected_while_in_flight():
    requests = []

    async def scenario():
        release = asyncio.Event()

        async def handler(request):
            requests.append(str(request.url))
            await release.wait()
            return httpx.Response(
                200, json={"results": [make_summary_doc("b")], "next_page": None}
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            accumulator = ListingAccumulator(http)
            accumulator.initialize(make_pagination("a", next_page=PAGE_2))
            first = asyncio.create_task(accumulator.load_more())
            await asyncio.sleep(0)
            second = await accumulator.load_more()
            release.set()
            return accumulator, await first, second

    accumulator, first, second = asyncio.run(scenario())

    assert second.status == STATUS_BUSY
    assert first.status == STATUS_LOADED
    assert requests == [PAGE_2]
    assert [p.uid for p in accumulator.posts] == ["a", "b"]


def test_snapshot_reflects_accumulated_state():
    accumulator = ListingAccumulator(http=None)
    accumulator.initialize(make_pagination("a", "b", next_page=PAGE_2))

    snapshot = accumulator.snapshot()

    assert [p.uid for p in snapshot.results] == ["a", "b"]
    assert snapshot.next_page == PAGE_2
