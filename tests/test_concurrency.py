# tests/test_concurrency.py
import asyncio

import httpx

from catalog.main import app


async def _delete(product_id):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        return await ac.delete(f"/DeleteProduct/{product_id}")


def test_concurrent_deletes_of_same_product(client):
    pid = client.post("/CreateProduct", json={"name": "last", "price": 10}).headers["X-Product-Id"]

    async def race():
        return await asyncio.gather(_delete(pid), _delete(pid))

    results = asyncio.run(race())
    statuses = sorted(r.status_code for r in results)
    # exactly one of them removes the document
    assert statuses == [200, 404]
    assert client.get("/GetProducts").json() == []


def test_concurrent_creates_get_distinct_ids(client):
    async def create(i):
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
            return await ac.post("/CreateProduct", json={"name": f"p{i}", "price": i})

    async def burst():
        return await asyncio.gather(*(create(i) for i in range(10)))

    results = asyncio.run(burst())
    assert all(r.status_code == 200 for r in results)
    assert len({r.headers["X-Product-Id"] for r in results}) == 10
    assert len(client.get("/GetProducts").json()) == 10
