"""
Tests for logging communications and keeping the company's history in sync.
"""

import pytest
from bson import ObjectId


def _log_payload(company_id, **overrides):
    payload = {"companyId": company_id, "communicationType": "call", "communicationDate": "2024-01-01"}
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_log_communication_for_unknown_company_creates_nothing(client, fake_db):
    response = await client.post("/api/communications", json=_log_payload(str(ObjectId())))

    assert response.status_code == 404
    assert response.json() == {"message": "Company not found"}
    assert fake_db["communications"].documents == []


@pytest.mark.asyncio
async def test_log_communication_appends_id_and_sets_next_communication(client, acme, fake_db):
    response = await client.post(
        "/api/communications",
        json=_log_payload(acme["_id"], notes="Intro call", nextCommunication="follow up"),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Communication logged successfully"
    communication = body["communication"]
    assert communication["companyId"] == acme["_id"]
    assert communication["notes"] == "Intro call"

    company = fake_db["companies"].documents[0]
    assert company["lastCommunications"] == [ObjectId(communication["_id"])]
    assert company["nextCommunication"] == "follow up"

    updated_company = body["updatedCompany"]
    assert updated_company["nextCommunication"] == "follow up"
    assert [c["_id"] for c in updated_company["lastCommunications"]] == [communication["_id"]]


@pytest.mark.asyncio
async def test_log_communication_grows_history_by_exactly_one(client, acme, fake_db):
    first = await client.post("/api/communications", json=_log_payload(acme["_id"]))
    before = list(fake_db["companies"].documents[0]["lastCommunications"])

    second = await client.post("/api/communications", json=_log_payload(acme["_id"], communicationType="email"))

    after = fake_db["companies"].documents[0]["lastCommunications"]
    assert len(after) == len(before) + 1
    assert after[-1] == ObjectId(second.json()["communication"]["_id"])
    assert after[0] == ObjectId(first.json()["communication"]["_id"])


@pytest.mark.asyncio
async def test_log_communication_overwrites_previous_next_communication(client, acme, fake_db):
    await client.post("/api/communications", json=_log_payload(acme["_id"], nextCommunication="send proposal"))
    await client.post("/api/communications", json=_log_payload(acme["_id"], nextCommunication="schedule demo"))

    assert fake_db["companies"].documents[0]["nextCommunication"] == "schedule demo"


@pytest.mark.asyncio
async def test_log_communication_without_next_clears_it(client, acme, fake_db):
    await client.post("/api/communications", json=_log_payload(acme["_id"], nextCommunication="send proposal"))

    response = await client.post("/api/communications", json=_log_payload(acme["_id"]))

    assert response.status_code == 201
    assert fake_db["companies"].documents[0]["nextCommunication"] is None
    assert response.json()["updatedCompany"]["nextCommunication"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["companyId", "communicationType", "communicationDate"])
async def test_log_communication_missing_required_field_returns_400(client, acme, fake_db, missing):
    payload = _log_payload(acme["_id"])
    del payload[missing]

    response = await client.post("/api/communications", json=payload)

    assert response.status_code == 400
    assert response.json()["message"] == "Error logging communication"
    assert fake_db["communications"].documents == []
    assert fake_db["companies"].documents[0]["lastCommunications"] == []


@pytest.mark.asyncio
async def test_log_communication_with_malformed_company_id_returns_400(client, fake_db):
    response = await client.post("/api/communications", json=_log_payload("acme"))

    assert response.status_code == 400
    assert fake_db["communications"].documents == []


@pytest.mark.asyncio
async def test_failed_insert_leaves_company_untouched(client, acme, fake_db):
    fake_db["communications"].fail_on.add("insert_one")

    response = await client.post("/api/communications", json=_log_payload(acme["_id"], nextCommunication="x"))

    assert response.status_code == 500
    assert response.json()["message"] == "Error logging communication"
    company = fake_db["companies"].documents[0]
    assert company["lastCommunications"] == []
    assert company["nextCommunication"] is None


@pytest.mark.asyncio
async def test_failed_company_update_leaves_orphaned_communication(client, acme, fake_db):
    """No rollback: the stored communication stays, but the company does not reference it."""
    fake_db["companies"].fail_on.add("update_one")

    response = await client.post("/api/communications", json=_log_payload(acme["_id"], nextCommunication="x"))

    assert response.status_code == 500
    assert len(fake_db["communications"].documents) == 1
    company = fake_db["companies"].documents[0]
    assert company["lastCommunications"] == []
    assert company["nextCommunication"] is None


@pytest.mark.asyncio
async def test_list_communications_populates_company(client, acme, fake_db):
    await client.post("/api/communications", json=_log_payload(acme["_id"]))

    response = await client.get("/api/communications")

    assert response.status_code == 200
    communications = response.json()
    assert len(communications) == 1
    assert communications[0]["companyId"]["_id"] == acme["_id"]
    assert communications[0]["companyId"]["name"] == "Acme"


@pytest.mark.asyncio
async def test_list_communications_for_deleted_company_has_null_company(client, acme, fake_db):
    await client.post("/api/communications", json=_log_payload(acme["_id"]))
    await client.delete(f"/api/companies/{acme['_id']}")

    response = await client.get("/api/communications")

    assert response.status_code == 200
    assert response.json()[0]["companyId"] is None


@pytest.mark.asyncio
async def test_delete_communication_keeps_orphan_reference_on_company(client, acme, fake_db):
    """Current behavior: deleting a communication does not remove its id from lastCommunications."""
    logged = await client.post("/api/communications", json=_log_payload(acme["_id"]))
    communication_id = logged.json()["communication"]["_id"]

    response = await client.delete(f"/api/communications/{communication_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Communication deleted successfully"
    assert body["deletedCommunication"]["_id"] == communication_id
    assert fake_db["communications"].documents == []
    assert fake_db["companies"].documents[0]["lastCommunications"] == [ObjectId(communication_id)]

    # Populated reads skip the dangling id
    company = (await client.get(f"/api/companies/{acme['_id']}")).json()
    assert company["lastCommunications"] == []


@pytest.mark.asyncio
async def test_delete_unknown_communication_returns_404(client, fake_db):
    response = await client.delete(f"/api/communications/{ObjectId()}")

    assert response.status_code == 404
    assert response.json() == {"message": "Communication not found"}


@pytest.mark.asyncio
async def test_end_to_end_acme_scenario(client, fake_db):
    created = await client.post("/api/companies", json={"name": "Acme", "location": "NY"})
    assert created.status_code == 201
    company_id = created.json()["company"]["_id"]

    logged = await client.post(
        "/api/communications",
        json={
            "companyId": company_id,
            "communicationType": "call",
            "communicationDate": "2024-01-01",
            "nextCommunication": "follow up",
        },
    )
    assert logged.status_code == 201

    company = (await client.get(f"/api/companies/{company_id}")).json()
    assert company["nextCommunication"] == "follow up"
    assert len(company["lastCommunications"]) == 1

    # Setting the company's nextCommunication text does not schedule anything
    scheduled = await client.get(f"/api/next-communications/{company_id}")
    assert scheduled.status_code == 200
    assert scheduled.json() == []
