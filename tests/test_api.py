"""Integration tests for the roller and preset API endpoints."""

import pytest
from httpx import AsyncClient

from tests.conftest import create_preset


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["engine"] == "dicepool"


@pytest.mark.asyncio
async def test_initial_state(client: AsyncClient):
    resp = await client.get("/api/roller")
    assert resp.status_code == 200
    data = resp.json()
    assert data["settings"] == {
        "pool_size": 8,
        "again_threshold": 10,
        "exploding_enabled": True,
        "rote": False,
        "chance_die": False,
    }
    assert data["outcome"] == {"successes": 0, "willpower_successes": None}
    assert data["summary"] == {"chance_percent": 94, "expected_successes": 2.7}
    assert data["active_preset_id"] is None


@pytest.mark.asyncio
async def test_update_settings_clamps_and_recomputes(client: AsyncClient):
    resp = await client.patch("/api/roller/settings", json={
        "pool_size": 5,
        "again_threshold": 3,
        "exploding_enabled": False,
        "rote": True,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["settings"]["again_threshold"] == 5
    assert data["settings"]["rote"] is True
    assert data["summary"]["chance_percent"] == round(100 * (1 - 0.7**10))


@pytest.mark.asyncio
async def test_chance_die_settings(client: AsyncClient):
    resp = await client.patch("/api/roller/settings", json={"pool_size": 0})
    data = resp.json()
    assert data["settings"]["chance_die"] is True
    assert data["settings"]["exploding_enabled"] is False
    assert data["summary"] == {"chance_percent": 10, "expected_successes": 0.1}

    resp = await client.patch("/api/roller/settings", json={"pool_size": 3})
    assert resp.json()["settings"]["exploding_enabled"] is True


@pytest.mark.asyncio
async def test_roll_willpower_clear(client: AsyncClient):
    resp = await client.post("/api/roller/roll")
    assert resp.status_code == 200
    rolled = resp.json()["outcome"]
    assert rolled["successes"] >= 0
    assert rolled["willpower_successes"] is None

    resp = await client.post("/api/roller/willpower")
    outcome = resp.json()["outcome"]
    assert outcome["willpower_successes"] >= 0
    assert outcome["successes"] == rolled["successes"] + outcome["willpower_successes"]

    resp = await client.post("/api/roller/clear")
    assert resp.json()["outcome"] == {"successes": 0, "willpower_successes": None}


@pytest.mark.asyncio
async def test_chance_die_roll_is_zero_or_one(client: AsyncClient):
    await client.patch("/api/roller/settings", json={"pool_size": 0})
    for _ in range(20):
        resp = await client.post("/api/roller/roll")
        assert resp.json()["outcome"]["successes"] in (0, 1)


@pytest.mark.asyncio
async def test_analyze_endpoint(client: AsyncClient):
    resp = await client.post("/api/roller/analyze", json={
        "pool_size": 1,
        "again_threshold": 6,
        "exploding_enabled": True,
    })
    assert resp.status_code == 200
    assert resp.json()["expected_successes"] == pytest.approx(0.6)

    resp = await client.post("/api/roller/analyze", json={"pool_size": 0})
    assert resp.json() == {"chance_percent": 10, "expected_successes": 0.1}

    # The roller's own settings are untouched
    state = (await client.get("/api/roller")).json()
    assert state["settings"]["pool_size"] == 8


@pytest.mark.asyncio
async def test_create_preset_from_current_settings(client: AsyncClient):
    await client.patch("/api/roller/settings", json={"pool_size": 6, "rote": True})
    preset = await create_preset(client, "Climb")
    assert preset["pool_size"] == 6
    assert preset["rote"] is True
    assert preset["again_threshold"] == 10
    assert preset["exploding_enabled"] is True
    assert preset["position"] == 0


@pytest.mark.asyncio
async def test_create_preset_validation(client: AsyncClient):
    resp = await client.post("/api/presets", json={"name": "x", "again_threshold": 4})
    assert resp.status_code == 422
    resp = await client.post("/api/presets", json={"name": "x", "pool_size": -1})
    assert resp.status_code == 422
    resp = await client.post("/api/presets", json={"name": "   "})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_preset_crud_and_order(client: AsyncClient):
    a = await create_preset(client, "A", pool_size=3)
    b = await create_preset(client, "B<script>", pool_size=4)
    assert b["name"] == "B&lt;script&gt;"

    resp = await client.patch(f"/api/presets/{a['id']}", json={"name": "Alpha"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Alpha"

    resp = await client.put("/api/presets/order", json={"ids": [b["id"], a["id"]]})
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == [b["id"], a["id"]]

    resp = await client.get("/api/presets")
    assert [p["name"] for p in resp.json()] == ["B&lt;script&gt;", "Alpha"]

    resp = await client.put("/api/presets/order", json={"ids": [a["id"]]})
    assert resp.status_code == 400

    resp = await client.delete(f"/api/presets/{a['id']}")
    assert resp.status_code == 200
    resp = await client.get(f"/api/presets/{a['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_missing_preset_returns_404(client: AsyncClient):
    assert (await client.patch("/api/presets/none", json={"name": "x"})).status_code == 404
    assert (await client.delete("/api/presets/none")).status_code == 404
    assert (await client.post("/api/presets/none/load")).status_code == 404


@pytest.mark.asyncio
async def test_load_preset_marks_active_until_changed(client: AsyncClient):
    preset = await create_preset(
        client, "Chance", pool_size=0, again_threshold=8, rote=False, exploding_enabled=True
    )

    resp = await client.post(f"/api/presets/{preset['id']}/load")
    assert resp.status_code == 200
    data = resp.json()
    assert data["active_preset_id"] == preset["id"]
    assert data["settings"]["chance_die"] is True
    assert data["summary"] == {"chance_percent": 10, "expected_successes": 0.1}

    resp = await client.patch("/api/roller/settings", json={"pool_size": 2})
    data = resp.json()
    assert data["active_preset_id"] is None
    assert data["settings"]["again_threshold"] == 8
    assert data["settings"]["exploding_enabled"] is True


@pytest.mark.asyncio
async def test_deleting_active_preset_clears_it(client: AsyncClient):
    preset = await create_preset(client, "Sneak", pool_size=4)
    await client.post(f"/api/presets/{preset['id']}/load")
    await client.delete(f"/api/presets/{preset['id']}")
    state = (await client.get("/api/roller")).json()
    assert state["active_preset_id"] is None
