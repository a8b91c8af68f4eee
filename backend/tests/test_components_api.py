"""Admin component endpoints: palette, add, list, reorder, edit, delete."""

import uuid

import pytest
from httpx import AsyncClient

from tests.helpers import committed_store, seed_components, seed_page

pytestmark = pytest.mark.api


async def _page(engine, positions=(), component_type="hero", config=None):
    async with committed_store(engine) as data:
        page = await seed_page(data, "Home", is_home=True)
        rows = await seed_components(data, page["id"], list(positions), component_type, config)
    return page, rows


async def test_component_types_lists_palette(client: AsyncClient):
    response = await client.get("/api/v1/component-types")

    assert response.status_code == 200
    by_type = {t["type"]: t for t in response.json()}
    assert set(by_type) == {"navigation", "hero", "product_grid", "contact_form", "cart", "footer"}
    assert by_type["hero"]["defaults"]["ctaText"] == "DISCOVER MORE"
    assert "split_left" in by_type["hero"]["variants"]
    assert by_type["cart"]["variants"] == {}


async def test_add_component_appends_with_variant_preset(client: AsyncClient, engine):
    page, _ = await _page(engine, [0, 3])

    response = await client.post(
        f"/api/v1/pages/{page['id']}/components",
        json={"type": "navigation", "variant": "dark", "overrides": {"logoText": "ACME"}},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["position"] == 4
    assert body["config"]["variant"] == "dark"
    assert body["config"]["backgroundColor"] == "#000000"
    assert body["config"]["logoText"] == "ACME"
    assert body["config"]["linkSize"] == "13px"


async def test_overrides_win_over_variant_preset(client: AsyncClient, engine):
    page, _ = await _page(engine)

    response = await client.post(
        f"/api/v1/pages/{page['id']}/components",
        json={"type": "footer", "variant": "light", "overrides": {"textColor": "#ff0000"}},
    )

    assert response.json()["config"]["textColor"] == "#ff0000"
    assert response.json()["config"]["backgroundColor"] == "#ffffff"


async def test_add_unknown_type_is_rejected(client: AsyncClient, engine):
    page, _ = await _page(engine)
    response = await client.post(
        f"/api/v1/pages/{page['id']}/components", json={"type": "carousel"}
    )
    assert response.status_code == 422


async def test_add_to_missing_page_is_an_insert_failure(client: AsyncClient):
    response = await client.post(
        f"/api/v1/pages/{uuid.uuid4()}/components", json={"type": "hero"}
    )

    assert response.status_code == 409
    assert response.json()["title"] == "Insert Failed"


async def test_list_components_in_position_order(client: AsyncClient, engine):
    page, rows = await _page(engine, [4, 1, 2])

    response = await client.get(f"/api/v1/pages/{page['id']}/components")

    assert response.status_code == 200
    assert [c["position"] for c in response.json()] == [1, 2, 4]
    assert response.json()[0]["id"] == str(rows[1]["id"])


async def test_list_components_of_missing_page(client: AsyncClient):
    response = await client.get(f"/api/v1/pages/{uuid.uuid4()}/components")
    assert response.status_code == 404


async def test_reorder_moves_and_renumbers(client: AsyncClient, engine):
    page, rows = await _page(engine, [0, 2, 5])

    response = await client.post(
        f"/api/v1/pages/{page['id']}/components/reorder",
        json={"from_index": 0, "to_index": 2},
    )

    assert response.status_code == 200
    expected = [str(rows[1]["id"]), str(rows[2]["id"]), str(rows[0]["id"])]
    assert [c["id"] for c in response.json()] == expected
    assert [c["position"] for c in response.json()] == [0, 1, 2]

    listed = (await client.get(f"/api/v1/pages/{page['id']}/components")).json()
    assert [c["id"] for c in listed] == expected


async def test_reorder_out_of_range(client: AsyncClient, engine):
    page, _ = await _page(engine, [0, 1])

    response = await client.post(
        f"/api/v1/pages/{page['id']}/components/reorder",
        json={"from_index": 0, "to_index": 2},
    )

    assert response.status_code == 422
    assert response.json()["title"] == "Invalid Reorder"


async def test_form_splits_known_and_unknown_keys(client: AsyncClient, engine):
    _, [row] = await _page(engine, [0], "cart", {"title": "BAG", "legacyFlag": True})

    response = await client.get(f"/api/v1/components/{row['id']}/form")

    assert response.status_code == 200
    body = response.json()
    assert body["fields"]["title"] == "BAG"
    assert body["fields"]["emptyText"] == "Your shopping bag is empty."
    assert body["unrecognized"] == ["legacyFlag"]


async def test_form_for_missing_component(client: AsyncClient):
    response = await client.get(f"/api/v1/components/{uuid.uuid4()}/form")
    assert response.status_code == 404


async def test_patch_config_replaces_stored_config(client: AsyncClient, engine):
    _, [row] = await _page(engine, [0], "hero", {"title": "Old", "legacy": 1})

    response = await client.patch(
        f"/api/v1/components/{row['id']}/config", json={"config": {"title": "New"}}
    )

    assert response.status_code == 200
    config = response.json()["config"]
    assert config["title"] == "New"
    assert "legacy" not in config
    assert config["ctaText"] == "DISCOVER MORE"
    async with committed_store(engine) as data:
        [stored] = await data.select("page_components", {"id": row["id"]})
    assert stored["config"] == {"title": "New"}


async def test_patch_config_of_missing_component(client: AsyncClient):
    response = await client.patch(
        f"/api/v1/components/{uuid.uuid4()}/config", json={"config": {}}
    )
    assert response.status_code == 404


async def test_delete_component_leaves_gap(client: AsyncClient, engine):
    page, rows = await _page(engine, [0, 1, 2])

    response = await client.delete(f"/api/v1/components/{rows[1]['id']}")
    assert response.status_code == 204

    listed = (await client.get(f"/api/v1/pages/{page['id']}/components")).json()
    assert [c["position"] for c in listed] == [0, 2]

    again = await client.delete(f"/api/v1/components/{rows[1]['id']}")
    assert again.status_code == 404
