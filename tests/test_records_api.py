"""End-to-end tests for bulk load, batch save and delete."""

import pytest

from aqar_backend.modules.records.registry import collection_names
from aqar_backend.modules.records.services import DEFAULT_SETTINGS

EXPECTED_KEYS = {
    "properties",
    "units",
    "tenants",
    "owners",
    "contracts",
    "transactions",
    "expenses",
    "wallets",
    "users",
    "reminders",
    "payoutVouchers",
    "settings",
}


def by_id(records: list[dict]) -> dict[str, dict]:
    return {record["id"]: record for record in records}


def contract(schedule=None, **overrides) -> dict:
    data = {
        "id": "contract-2",
        "propertyId": "prop-1",
        "unitId": "unit-101",
        "tenantId": "tenant-1",
        "startDate": "2025-01-01",
        "endDate": "2025-12-31",
        "rentAmount": "12000",
        "contractStatus": "active",
    }
    if schedule is not None:
        data["paymentSchedule"] = schedule
    data.update(overrides)
    return data


# ----- Load -----


@pytest.mark.asyncio
async def test_load_returns_every_collection(load_data):
    data = await load_data()

    assert set(data) == EXPECTED_KEYS
    assert len(data["users"]) == 4
    assert len(data["properties"]) == 1
    assert data["settings"] == DEFAULT_SETTINGS


@pytest.mark.asyncio
async def test_load_never_exposes_credentials(load_data):
    data = await load_data()

    for user in data["users"]:
        assert "password" not in user


@pytest.mark.asyncio
async def test_load_includes_declared_relations(load_data):
    data = await load_data()

    [prop] = data["properties"]
    assert [unit["id"] for unit in prop["units"]] == ["unit-101"]
    assert prop["documents"] == []

    [seeded_contract] = data["contracts"]
    assert len(seeded_contract["paymentSchedule"]) == 1
    assert seeded_contract["paymentSchedule"][0]["contractId"] == "contract-1"


# ----- Save -----


@pytest.mark.asyncio
async def test_save_is_idempotent(client, load_data):
    payload = [
        {
            "id": "prop-2",
            "propertyName": "مجمع الياسمين",
            "ownerId": "owner-1",
            "units": [],
        }
    ]

    for _ in range(2):
        response = await client.post("/api/save-item/properties", json=payload)
        assert response.status_code == 200
        assert response.json() == {"success": True}

    properties = by_id((await load_data())["properties"])
    assert len(properties) == 2
    assert properties["prop-2"]["propertyName"] == "مجمع الياسمين"


@pytest.mark.asyncio
async def test_save_overwrites_supplied_fields_only(client, load_data):
    response = await client.post(
        "/api/save-item/units",
        json=[{"id": "unit-101", "propertyId": "prop-1", "unitNumber": "101", "status": "شاغرة"}],
    )
    assert response.status_code == 200

    unit = by_id((await load_data())["units"])["unit-101"]
    assert unit["status"] == "شاغرة"
    assert unit["rentAmount"] == "50000"


@pytest.mark.asyncio
async def test_failed_item_rolls_back_the_whole_batch(client, load_data):
    payload = [
        {"id": "rem-1", "title": "تجديد العقد", "ownerId": "owner-1"},
        {"id": "rem-2", "title": "صيانة", "colour": "red"},
    ]

    response = await client.post("/api/save-item/reminders", json=payload)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to save reminders"}
    assert (await load_data())["reminders"] == []


@pytest.mark.asyncio
async def test_dangling_reference_rolls_back(client, load_data):
    payload = [{"id": "unit-900", "propertyId": "prop-missing", "unitNumber": "900"}]

    response = await client.post("/api/save-item/units", json=payload)

    assert response.status_code == 500
    assert "unit-900" not in by_id((await load_data())["units"])


@pytest.mark.asyncio
async def test_unknown_key_is_a_client_error(client):
    response = await client.post("/api/save-item/landlords", json=[])

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid key"}


@pytest.mark.asyncio
async def test_collection_payload_must_be_a_list(client):
    response = await client.post("/api/save-item/units", json={"id": "unit-101"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unparseable_body_is_a_client_error(client):
    response = await client.post(
        "/api/save-item/units",
        content=b"[{not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"].startswith("Invalid request")


@pytest.mark.asyncio
async def test_tenant_id_is_stored_as_civil_id(client, load_data):
    response = await client.post(
        "/api/save-item/tenants",
        json=[{"id": "tenant-2", "tenantName": "خالد", "tenantId": "2000000002"}],
    )
    assert response.status_code == 200

    tenant = by_id((await load_data())["tenants"])["tenant-2"]
    assert tenant["tenantIdNo"] == "2000000002"


@pytest.mark.asyncio
async def test_payment_schedule_is_replaced_wholesale(client, load_data):
    first = [
        {"dueDate": "2025-01-01", "amount": 6000.0, "status": "pending"},
        {"dueDate": "2025-07-01", "amount": 6000.0, "status": "pending"},
    ]
    response = await client.post("/api/save-item/contracts", json=[contract(first)])
    assert response.status_code == 200

    saved = by_id((await load_data())["contracts"])["contract-2"]
    assert [(row["dueDate"], row["amount"]) for row in saved["paymentSchedule"]] == [
        ("2025-01-01", "6000"),
        ("2025-07-01", "6000"),
    ]

    second = [{"dueDate": "2025-01-01", "amount": 12000, "status": "paid"}]
    await client.post("/api/save-item/contracts", json=[contract(second)])
    saved = by_id((await load_data())["contracts"])["contract-2"]
    assert [(row["amount"], row["status"]) for row in saved["paymentSchedule"]] == [
        ("12000", "paid")
    ]

    await client.post("/api/save-item/contracts", json=[contract([])])
    saved = by_id((await load_data())["contracts"])["contract-2"]
    assert saved["paymentSchedule"] == []


@pytest.mark.asyncio
async def test_contract_without_schedule_keeps_existing_rows(client, load_data):
    schedule = [{"dueDate": "2025-01-01", "amount": 100}]
    await client.post("/api/save-item/contracts", json=[contract(schedule)])

    await client.post(
        "/api/save-item/contracts", json=[contract(contractStatus="expired")]
    )

    saved = by_id((await load_data())["contracts"])["contract-2"]
    assert saved["contractStatus"] == "expired"
    assert len(saved["paymentSchedule"]) == 1


@pytest.mark.asyncio
async def test_settings_are_saved_as_a_singleton(client, load_data):
    payload = {"appName": "عقاري", "primaryColor": "teal", "isDemoMode": True}

    response = await client.post("/api/save-item/settings", json=payload)
    assert response.status_code == 200

    settings = (await load_data())["settings"]
    assert settings["appName"] == "عقاري"
    assert settings["primaryColor"] == "teal"
    assert settings["isDemoMode"] is True


@pytest.mark.asyncio
async def test_settings_payload_must_be_an_object(client):
    response = await client.post("/api/save-item/settings", json=[{"appName": "x"}])

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_user_save_without_password_keeps_credential(client, load_data):
    users = by_id((await load_data())["users"])
    admin = {**users["user-admin"], "name": "مدير النظام", "wallet": None}

    response = await client.post("/api/save-item/users", json=[admin])
    assert response.status_code == 200

    login = await client.post(
        "/api/login",
        json={"loginMethod": "email", "identifier": "admin@example.com", "password": "password"},
    )
    assert login.status_code == 200
    assert login.json()["user"]["name"] == "مدير النظام"


# ----- Round trip -----

EXTRA_RECORDS = {
    "transactions": [
        {"id": "tx-1", "contractId": "contract-1", "type": "income", "amount": 500, "date": "2025-01-01"}
    ],
    "expenses": [{"id": "exp-1", "propertyId": "prop-1", "amount": 120.5, "category": "صيانة"}],
    "reminders": [{"id": "rem-1", "ownerId": "owner-1", "title": "تجديد العقد"}],
    "payoutVouchers": [{"id": "pv-1", "ownerId": "owner-1", "amount": 1000}],
    "settings": {"appName": "عقاري", "primaryColor": "teal"},
}

TIMESTAMPS = {"createdAt", "updatedAt"}

# Payment schedule rows are recreated on every contract save
CHILD_STORE_KEYS = TIMESTAMPS | {"id", "contractId"}


def content(record: dict) -> dict:
    """Record fields without store-assigned values."""
    return {
        key: [
            {k: v for k, v in child.items() if k not in CHILD_STORE_KEYS}
            for child in value
        ]
        if isinstance(value, list)
        else value
        for key, value in record.items()
        if key not in TIMESTAMPS
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("key", collection_names())
async def test_loaded_collection_saves_back_unchanged(client, load_data, key):
    for extra_key, payload in EXTRA_RECORDS.items():
        response = await client.post(f"/api/save-item/{extra_key}", json=payload)
        assert response.status_code == 200

    before = (await load_data())[key]

    response = await client.post(f"/api/save-item/{key}", json=before)
    assert response.status_code == 200

    after = (await load_data())[key]
    if isinstance(before, dict):
        assert content(after) == content(before)
    else:
        assert len(before) > 0
        assert [content(record) for record in after] == [
            content(record) for record in before
        ]


# ----- Delete -----


@pytest.mark.asyncio
async def test_delete_removes_the_record(client, load_data):
    await client.post(
        "/api/save-item/expenses",
        json=[{"id": "exp-1", "propertyId": "prop-1", "amount": 350.5, "category": "صيانة"}],
    )

    response = await client.delete("/api/delete-item/expenses/exp-1")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert (await load_data())["expenses"] == []


@pytest.mark.asyncio
async def test_delete_contract_cascades_to_schedule(client, load_data):
    response = await client.delete("/api/delete-item/contracts/contract-1")

    assert response.status_code == 200
    assert (await load_data())["contracts"] == []


@pytest.mark.asyncio
async def test_delete_missing_id_is_a_store_failure(client):
    response = await client.delete("/api/delete-item/expenses/does-not-exist")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to delete item"}


@pytest.mark.asyncio
async def test_delete_referenced_record_fails(client, load_data):
    response = await client.delete("/api/delete-item/properties/prop-1")

    assert response.status_code == 500
    assert len((await load_data())["properties"]) == 1


@pytest.mark.asyncio
async def test_delete_rejects_unknown_and_singleton_keys(client):
    assert (await client.delete("/api/delete-item/landlords/x")).status_code == 400
    assert (await client.delete("/api/delete-item/settings/settings")).status_code == 400


# ----- Health -----


@pytest.mark.asyncio
async def test_health_echoes_request_id(client):
    response = await client.get("/api/health", headers={"x-request-id": "abc12345"})

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["x-request-id"] == "abc12345"
