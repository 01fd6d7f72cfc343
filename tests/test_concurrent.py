"""Tests that concurrent requests do not lose updates.

Every store operation reads and rewrites the whole snapshot, so these
tests check that the store lock serializes those cycles.
"""

import asyncio
import json

import pytest


@pytest.mark.asyncio
class TestConcurrentRequests:
    """Many simultaneous requests against one process."""

    async def test_concurrent_redirects_count_every_click(self, client, data_file):
        """Concurrent GET /{code} requests all redirect and all are counted."""
        create_resp = await client.post(
            "/api/shorten",
            json={"url": "https://example.com/redirect-target"},
        )
        code = create_resp.json()["code"]

        concurrency = 50
        tasks = [client.get(f"/{code}", follow_redirects=False) for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 302, f"Request {i}: status {r.status_code}"
            assert r.headers.get("location") == "https://example.com/redirect-target"

        assert json.loads(data_file.read_text())[code]["clicks"] == concurrency

    async def test_concurrent_shorten_requests(self, client):
        """Concurrent POST /api/shorten all succeed and every record is kept."""
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        tasks = [client.post("/api/shorten", json={"url": url}) for url in urls]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        codes = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code} body={r.text}"
            codes.append(r.json()["code"])

        assert len(set(codes)) == concurrency

        listing = (await client.get("/api/urls")).json()
        assert {listing[code]["url"] for code in codes} == set(urls)

    async def test_concurrent_custom_code_race(self, client):
        """Exactly one of several simultaneous claims on a code wins."""
        tasks = [
            client.post(
                "/api/shorten",
                json={"url": f"https://example.com/{i}", "customCode": "contested"},
            )
            for i in range(10)
        ]
        responses = await asyncio.gather(*tasks)

        statuses = sorted(r.status_code for r in responses)
        assert statuses == [200] + [409] * 9

    async def test_concurrent_mixed_operations(self, service):
        """Interleaved resolves and deletes leave a consistent store."""
        keep = (await service.shorten("https://example.com/keep")).code
        drop = [(await service.shorten(f"https://example.com/drop{i}")).code for i in range(10)]

        await asyncio.gather(
            *(service.resolve(keep) for _ in range(20)),
            *(service.delete_code(code) for code in drop),
        )

        records = await service.list_all()
        assert list(records) == [keep]
        assert records[keep].clicks == 20
