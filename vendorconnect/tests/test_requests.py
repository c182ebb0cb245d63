from decimal import Decimal

import pytest


@pytest.mark.asyncio
async def test_request_resource_with_specification(client, vendor, buyer_user, buyer_headers, make_resource):
    resource = await make_resource(
        vendor, price=Decimal("150.00"), specifications={"Brick": 10, "Cement": 5}
    )

    response = await client.post(f"/api/v1/resources/{resource.id}/requests", headers=buyer_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["total"] == 2

    brick, cement = data["requests"]
    assert (brick["name"], brick["quantity"], brick["type"]) == ("Brick", 10, "Material")
    assert (cement["name"], cement["quantity"], cement["type"]) == ("Cement", 5, "Material")
    for line in data["requests"]:
        assert Decimal(line["cost"]) == Decimal("75.00")
        assert line["status"] == "pending"
        assert line["unit"] == "Each"
        assert line["resource_id"] == str(resource.id)
        assert line["vendor_id"] == str(vendor.id)
        assert line["user_id"] == str(buyer_user.id)


@pytest.mark.asyncio
async def test_request_resource_without_specification(client, vendor, buyer_headers, make_resource):
    resource = await make_resource(
        vendor, title="Excavator - 15 Ton", category="Equipment", price=Decimal("300.00"), unit="Day"
    )

    response = await client.post(
        f"/api/v1/resources/{resource.id}/requests",
        headers=buyer_headers,
        json={"returnable": True},
    )
    assert response.status_code == 201
    [line] = response.json()["requests"]
    assert line["name"] == "Excavator - 15 Ton"
    assert line["type"] == "Equipment"
    assert line["quantity"] == 1
    assert line["unit"] == "Day"
    assert line["returnable"] is True
    assert Decimal(line["cost"]) == Decimal("300.00")


@pytest.mark.asyncio
async def test_request_cost_rounds_half_up(client, vendor, buyer_headers, make_resource):
    resource = await make_resource(
        vendor, price=Decimal("100.00"), specifications={"Sand": 1, "Gravel": 2, "Drill": 1}
    )

    response = await client.post(f"/api/v1/resources/{resource.id}/requests", headers=buyer_headers)
    lines = response.json()["requests"]
    assert [Decimal(line["cost"]) for line in lines] == [Decimal("33.33")] * 3
    assert [line["type"] for line in lines] == ["Material", "Material", "Equipment"]


@pytest.mark.asyncio
async def test_request_with_corrupt_stored_specification(client, vendor, buyer_headers, make_resource):
    resource = await make_resource(vendor, specifications={"Drill": 0})

    response = await client.post(f"/api/v1/resources/{resource.id}/requests", headers=buyer_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_request_unknown_resource(client, buyer_headers):
    response = await client.post(
        "/api/v1/resources/00000000-0000-0000-0000-000000000000/requests",
        headers=buyer_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_request_requires_auth(client, vendor, make_resource):
    resource = await make_resource(vendor)
    response = await client.post(f"/api/v1/resources/{resource.id}/requests")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_my_and_incoming_requests(
    client, vendor, vendor_headers, buyer_headers, make_resource
):
    resource = await make_resource(vendor, specifications={"Brick": 10, "Cement": 5})
    await client.post(f"/api/v1/resources/{resource.id}/requests", headers=buyer_headers)

    mine = await client.get("/api/v1/requests", headers=buyer_headers)
    assert mine.status_code == 200
    assert mine.json()["total"] == 2

    incoming = await client.get("/api/v1/requests/incoming", headers=vendor_headers)
    assert incoming.status_code == 200
    assert {r["name"] for r in incoming.json()["requests"]} == {"Brick", "Cement"}

    filtered = await client.get(
        "/api/v1/requests", headers=buyer_headers, params={"status": "approved"}
    )
    assert filtered.json()["total"] == 0


@pytest.mark.asyncio
async def test_incoming_requests_require_vendor(client, buyer_headers):
    response = await client.get("/api/v1/requests/incoming", headers=buyer_headers)
    assert response.status_code == 403
