import httpx
import pytest

from app.routers.outfits import clamp_limit


async def _make_items(client, *types):
    ids = []
    for i, t in enumerate(types):
        resp = await client.post(
            "/v1/wardrobe",
            json={"name": f"{t} {i}", "type": t, "image_url": f"https://img.example.com/{i}.jpg"},
        )
        ids.append(resp.json()["data"]["id"])
    return ids


@pytest.mark.asyncio
async def test_log_outfit_increments_wear_counts(client: httpx.AsyncClient):
    top, bottom = await _make_items(client, "Top", "Bottom")
    payload = {"item_ids": [top, bottom], "outfit_date": "2026-10-01", "feedback": 4, "weather_data": {"temp": 18}}
    resp = await client.post("/v1/outfits", json=payload)
    assert resp.status_code == 201
    entry = resp.json()["data"]
    assert entry["outfit_date"] == "2026-10-01"
    assert [i["id"] for i in entry["items"]] == [top, bottom]
    assert all(i["wear_count"] == 1 for i in entry["items"])
    assert all(i["last_worn"] for i in entry["items"])

    await client.post("/v1/outfits", json={"item_ids": [top]})
    item = (await client.get(f"/v1/wardrobe/{top}")).json()["data"]
    assert item["wear_count"] == 2


@pytest.mark.asyncio
async def test_log_outfit_rejects_unknown_items(client: httpx.AsyncClient):
    (top,) = await _make_items(client, "Top")
    resp = await client.post("/v1/outfits", json={"item_ids": [top, 4242]})
    assert resp.status_code == 400
    assert "4242" in resp.json()["validation_errors"][0]["message"]


@pytest.mark.asyncio
async def test_log_outfit_requires_items(client: httpx.AsyncClient):
    resp = await client.post("/v1/outfits", json={"item_ids": []})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_history_newest_first_and_limited(client: httpx.AsyncClient):
    (top,) = await _make_items(client, "Top")
    for day in ("2026-09-01", "2026-09-03", "2026-09-02"):
        await client.post("/v1/outfits", json={"item_ids": [top], "outfit_date": day})
    resp = await client.get("/v1/outfits/history")
    dates = [e["outfit_date"] for e in resp.json()["data"]]
    assert dates == ["2026-09-03", "2026-09-02", "2026-09-01"]
    assert resp.json()["data"][0]["items"][0]["id"] == top

    limited = await client.get("/v1/outfits/history", params={"limit": 1})
    assert len(limited.json()["data"]) == 1
    # zero clamps up to one
    clamped = await client.get("/v1/outfits/history", params={"limit": 0})
    assert len(clamped.json()["data"]) == 1


def test_clamp_limit():
    assert clamp_limit(0) == 1
    assert clamp_limit(-5) == 1
    assert clamp_limit(50) == 50
    assert clamp_limit(1000) == 200


@pytest.mark.asyncio
async def test_delete_outfit(client: httpx.AsyncClient):
    (top,) = await _make_items(client, "Top")
    outfit = (await client.post("/v1/outfits", json={"item_ids": [top]})).json()["data"]
    assert (await client.delete(f"/v1/outfits/{outfit['id']}")).status_code == 200
    assert (await client.get("/v1/outfits/history")).json()["data"] == []
    missing = await client.delete(f"/v1/outfits/{outfit['id']}")
    assert missing.status_code == 404
