import pytest

from app.infrastructure.db.models import ExamProfileModel


def profile_payload(exam_date, name="Receita Federal", workspace_id="ws-1"):
    return {
        "name": name,
        "workspaceId": workspace_id,
        "examDate": exam_date.isoformat(),
        "weeklyHours": 20,
        "subjects": [
            {"subject": "Direito Tributário", "weight": 2, "currentLevel": 3, "goalLevel": 8},
            {"subject": "Português", "weight": 1, "currentLevel": 5, "goalLevel": 6},
        ],
    }


async def create_profile(client, exam_date, **kwargs):
    resp = await client.post("/api/v1/exam-profiles", json=profile_payload(exam_date, **kwargs))
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_profile(client, exam_in_ten_weeks):
    data = await create_profile(client, exam_in_ten_weeks)

    assert data["id"] > 0
    assert data["workspaceId"] == "ws-1"
    assert data["examDate"] == exam_in_ten_weeks.isoformat()
    assert data["weeklyHours"] == 20
    assert data["isActive"] is True
    assert [s["position"] for s in data["subjects"]] == [0, 1]
    assert data["subjects"][0]["currentLevel"] == 3


@pytest.mark.asyncio
@pytest.mark.integration
async def test_duplicate_name_rejected(client, exam_in_ten_weeks):
    await create_profile(client, exam_in_ten_weeks)

    resp = await client.post("/api/v1/exam-profiles", json=profile_payload(exam_in_ten_weeks))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "A profile with this name already exists"

    # Same name in another workspace is fine
    await create_profile(client, exam_in_ten_weeks, workspace_id="ws-2")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_rejects_out_of_range_fields(client, exam_in_ten_weeks):
    payload = profile_payload(exam_in_ten_weeks)
    payload["weeklyHours"] = 200
    payload["subjects"][0]["weight"] = 0

    resp = await client.post("/api/v1/exam-profiles", json=payload)

    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_requires_subjects(client, exam_in_ten_weeks):
    payload = profile_payload(exam_in_ten_weeks)
    payload["subjects"] = []

    resp = await client.post("/api/v1/exam-profiles", json=payload)

    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_profiles(client, exam_in_ten_weeks):
    await create_profile(client, exam_in_ten_weeks, name="B")
    await create_profile(client, exam_in_ten_weeks, name="A")
    await create_profile(client, exam_in_ten_weeks, name="C", workspace_id="ws-2")

    resp = await client.get("/api/v1/exam-profiles", params={"workspaceId": "ws-1"})

    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()] == ["A", "B"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_missing_profile(client):
    resp = await client.get("/api/v1/exam-profiles/12345")
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_profile(client, exam_in_ten_weeks):
    created = await create_profile(client, exam_in_ten_weeks)

    resp = await client.put(
        f"/api/v1/exam-profiles/{created['id']}",
        json={
            "weeklyHours": 12,
            "isActive": False,
            "subjects": [{"subject": "Contabilidade", "weight": 1.5, "currentLevel": 2, "goalLevel": 9}],
        },
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Receita Federal"
    assert data["weeklyHours"] == 12
    assert data["isActive"] is False
    assert [s["subject"] for s in data["subjects"]] == ["Contabilidade"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_to_existing_name_rejected(client, exam_in_ten_weeks):
    await create_profile(client, exam_in_ten_weeks, name="A")
    second = await create_profile(client, exam_in_ten_weeks, name="B")

    resp = await client.put(f"/api/v1/exam-profiles/{second['id']}", json={"name": "A"})

    assert resp.status_code == 400


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_profile(client, exam_in_ten_weeks):
    created = await create_profile(client, exam_in_ten_weeks)

    resp = await client.delete(f"/api/v1/exam-profiles/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    assert (await client.get(f"/api/v1/exam-profiles/{created['id']}")).status_code == 404
    assert (await client.delete(f"/api/v1/exam-profiles/{created['id']}")).status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_calculate_allocation(client, exam_in_ten_weeks):
    created = await create_profile(client, exam_in_ten_weeks)

    resp = await client.post(f"/api/v1/exam-profiles/{created['id']}/calculate")

    assert resp.status_code == 200
    data = resp.json()
    assert data["results"] == [
        {"subject": "Direito Tributário", "totalHours": 182.0, "hoursPerWeek": 18.2, "gap": 5, "percentage": 91},
        {"subject": "Português", "totalHours": 18.0, "hoursPerWeek": 1.8, "gap": 1, "percentage": 9},
    ]
    assert data["metadata"] == {
        "weeksUntilExam": 10,
        "totalAvailableHours": 200.0,
        "weeklyHours": 20.0,
        "examDate": exam_in_ten_weeks.isoformat(),
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_calculate_missing_profile(client):
    resp = await client.post("/api/v1/exam-profiles/999/calculate")
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_from_template(client, exam_in_ten_weeks):
    resp = await client.post(
        "/api/v1/exam-profiles/from-template",
        json={
            "workspaceId": "ws-1",
            "templateId": "inss-tecnico",
            "examDate": exam_in_ten_weeks.isoformat(),
            "weeklyHours": 15,
            "currentLevel": 2,
        },
    )

    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["name"] == "INSS - Técnico do Seguro Social"
    assert len(data["subjects"]) == 7
    assert data["subjects"][3] == {
        "subject": "Direito Previdenciário",
        "weight": 1.5,
        "currentLevel": 2,
        "goalLevel": 8,
        "position": 3,
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_from_unknown_template(client, exam_in_ten_weeks):
    resp = await client.post(
        "/api/v1/exam-profiles/from-template",
        json={
            "workspaceId": "ws-1",
            "templateId": "does-not-exist",
            "examDate": exam_in_ten_weeks.isoformat(),
            "weeklyHours": 15,
        },
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_stored_profile_without_subjects_is_unprocessable(client, db_session, exam_in_ten_weeks):
    row = ExamProfileModel(
        workspace_id="ws-1",
        name="Sem matérias",
        exam_date=exam_in_ten_weeks,
        weekly_hours=10,
    )
    db_session.add(row)
    await db_session.commit()
    profile_id = row.id

    for resp in (
        await client.get(f"/api/v1/exam-profiles/{profile_id}"),
        await client.post(f"/api/v1/exam-profiles/{profile_id}/calculate"),
        await client.get("/api/v1/exam-profiles", params={"workspaceId": "ws-1"}),
    ):
        assert resp.status_code == 422
        assert resp.json()["detail"] == [
            {"field": "subjects", "message": "must contain at least 1 subject"}
        ]
