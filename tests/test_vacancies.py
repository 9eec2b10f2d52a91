import pytest

from jobboard.core.permissions import Role
from tests.conftest import VACANCY_PAYLOAD, auth_headers

pytestmark = pytest.mark.asyncio


class TestCreateVacancy:
    @pytest.mark.parametrize("role", [Role.admin, Role.gestor])
    async def test_staff_creates_active_vacancy(self, client, make_user, role):
        staff = await make_user(role)
        r = await client.post("/vacancies", json=VACANCY_PAYLOAD, headers=auth_headers(staff))

        assert r.status_code == 201
        body = r.json()
        assert body["message"] == "Vacancy created"
        data = body["data"]
        assert data["title"] == VACANCY_PAYLOAD["title"]
        assert data["maxApplicants"] == 5
        assert data["salaryRange"] == VACANCY_PAYLOAD["salaryRange"]
        assert data["softSkills"] == VACANCY_PAYLOAD["softSkills"]
        assert data["modality"] == "hybrid"
        assert data["isActive"] is True
        assert data["applicationsCount"] == 0
        assert "createdAt" in data and "updatedAt" in data

    async def test_new_vacancy_ignores_inactive_flag(self, client, make_user):
        gestor = await make_user(Role.gestor)
        r = await client.post("/vacancies", json={**VACANCY_PAYLOAD, "isActive": False}, headers=auth_headers(gestor))
        assert r.json()["data"]["isActive"] is True

    async def test_snake_case_input_is_accepted(self, client, make_user):
        gestor = await make_user(Role.gestor)
        payload = {k: v for k, v in VACANCY_PAYLOAD.items() if k not in ("maxApplicants", "salaryRange", "softSkills")}
        payload.update(max_applicants=2, salary_range="1M COP")
        r = await client.post("/vacancies", json=payload, headers=auth_headers(gestor))
        assert r.status_code == 201
        assert r.json()["data"]["maxApplicants"] == 2
        assert r.json()["data"]["softSkills"] is None

    @pytest.mark.parametrize("max_applicants", [0, -3])
    async def test_capacity_below_one_is_rejected(self, client, make_user, max_applicants):
        gestor = await make_user(Role.gestor)
        r = await client.post(
            "/vacancies", json={**VACANCY_PAYLOAD, "maxApplicants": max_applicants}, headers=auth_headers(gestor)
        )
        assert r.status_code == 400
        assert r.json()["error"] == "RuleViolation"
        assert r.json()["message"] == "maxApplicants must allow at least 1 applicant"

    async def test_missing_field_is_rejected(self, client, make_user):
        gestor = await make_user(Role.gestor)
        payload = {k: v for k, v in VACANCY_PAYLOAD.items() if k != "title"}
        r = await client.post("/vacancies", json=payload, headers=auth_headers(gestor))
        assert r.status_code == 400
        assert "title" in r.json()["message"]

    async def test_unknown_modality_is_rejected(self, client, make_user):
        gestor = await make_user(Role.gestor)
        r = await client.post("/vacancies", json={**VACANCY_PAYLOAD, "modality": "moon"}, headers=auth_headers(gestor))
        assert r.status_code == 400

    async def test_coder_cannot_create(self, client, make_user):
        coder = await make_user(Role.coder)
        r = await client.post("/vacancies", json=VACANCY_PAYLOAD, headers=auth_headers(coder))
        assert r.status_code == 403


class TestListAndRead:
    async def test_listings_show_only_live_active_vacancies_newest_first(self, client, make_user, make_vacancy):
        coder = await make_user(Role.coder)
        admin = await make_user(Role.admin)
        older = await make_vacancy()
        newer = await make_vacancy()
        await make_vacancy(is_active=False)
        removed = await make_vacancy()
        await client.delete(f"/vacancies/{removed.id}", headers=auth_headers(admin))

        public = await client.get("/vacancies/public")
        private = await client.get("/vacancies", headers=auth_headers(coder))

        for r in (public, private):
            assert r.status_code == 200
            assert [v["id"] for v in r.json()["data"]] == [newer.id, older.id]

    async def test_applications_count_reflects_live_applications(self, client, make_user, make_vacancy):
        coder = await make_user(Role.coder)
        vacancy = await make_vacancy(max_applicants=3)
        await client.post("/applications/apply", json={"vacancyId": vacancy.id}, headers=auth_headers(coder))

        r = await client.get(f"/vacancies/{vacancy.id}", headers=auth_headers(coder))
        assert r.json()["data"]["applicationsCount"] == 1

    async def test_inactive_vacancy_is_readable_by_id(self, client, make_user, make_vacancy):
        gestor = await make_user(Role.gestor)
        vacancy = await make_vacancy(is_active=False)
        r = await client.get(f"/vacancies/{vacancy.id}", headers=auth_headers(gestor))
        assert r.status_code == 200
        assert r.json()["data"]["isActive"] is False

    async def test_unknown_vacancy_is_not_found(self, client, make_user):
        coder = await make_user(Role.coder)
        r = await client.get("/vacancies/999", headers=auth_headers(coder))
        assert r.status_code == 404
        assert r.json()["message"] == "Vacancy not found"

    async def test_listing_requires_authentication(self, client):
        r = await client.get("/vacancies", headers=auth_headers())
        assert r.status_code == 401


class TestUpdateToggleDelete:
    async def test_partial_update(self, client, make_user, make_vacancy):
        gestor = await make_user(Role.gestor)
        vacancy = await make_vacancy(max_applicants=2)

        r = await client.patch(
            f"/vacancies/{vacancy.id}",
            json={"title": "Staff Engineer", "maxApplicants": 8},
            headers=auth_headers(gestor),
        )

        assert r.status_code == 200
        data = r.json()["data"]
        assert data["title"] == "Staff Engineer"
        assert data["maxApplicants"] == 8
        assert data["company"] == vacancy.company

    async def test_update_rejects_capacity_below_one(self, client, make_user, make_vacancy):
        gestor = await make_user(Role.gestor)
        vacancy = await make_vacancy()
        r = await client.patch(f"/vacancies/{vacancy.id}", json={"maxApplicants": 0}, headers=auth_headers(gestor))
        assert r.status_code == 400

    async def test_update_rejects_null_capacity(self, client, make_user, make_vacancy):
        gestor = await make_user(Role.gestor)
        vacancy = await make_vacancy()
        r = await client.patch(f"/vacancies/{vacancy.id}", json={"maxApplicants": None}, headers=auth_headers(gestor))
        assert r.status_code == 400

    async def test_update_rejects_null_required_field(self, client, make_user, make_vacancy):
        gestor = await make_user(Role.gestor)
        vacancy = await make_vacancy()
        r = await client.patch(f"/vacancies/{vacancy.id}", json={"title": None}, headers=auth_headers(gestor))
        assert r.status_code == 400

    async def test_update_rejects_null_modality(self, client, make_user, make_vacancy):
        gestor = await make_user(Role.gestor)
        vacancy = await make_vacancy()
        r = await client.patch(f"/vacancies/{vacancy.id}", json={"modality": None}, headers=auth_headers(gestor))
        assert r.status_code == 400
        assert r.json()["error"] == "RuleViolation"

        unchanged = await client.get(f"/vacancies/{vacancy.id}", headers=auth_headers(gestor))
        assert unchanged.json()["data"]["modality"] == "remote"

    async def test_coder_cannot_update(self, client, make_user, make_vacancy):
        coder = await make_user(Role.coder)
        vacancy = await make_vacancy()
        r = await client.patch(f"/vacancies/{vacancy.id}", json={"title": "x"}, headers=auth_headers(coder))
        assert r.status_code == 403

    async def test_toggle_flips_active_flag(self, client, make_user, make_vacancy):
        gestor = await make_user(Role.gestor)
        vacancy = await make_vacancy()
        url = f"/vacancies/{vacancy.id}/toggle-active"

        first = await client.patch(url, headers=auth_headers(gestor))
        second = await client.patch(url, headers=auth_headers(gestor))

        assert first.json()["data"]["isActive"] is False
        assert second.json()["data"]["isActive"] is True

    async def test_only_admin_deletes(self, client, make_user, make_vacancy):
        gestor = await make_user(Role.gestor)
        admin = await make_user(Role.admin)
        vacancy = await make_vacancy()

        denied = await client.delete(f"/vacancies/{vacancy.id}", headers=auth_headers(gestor))
        assert denied.status_code == 403

        deleted = await client.delete(f"/vacancies/{vacancy.id}", headers=auth_headers(admin))
        assert deleted.status_code == 204
        assert deleted.content == b""

        gone = await client.get(f"/vacancies/{vacancy.id}", headers=auth_headers(admin))
        assert gone.status_code == 404

    async def test_delete_twice_is_not_found(self, client, make_user, make_vacancy):
        admin = await make_user(Role.admin)
        vacancy = await make_vacancy()
        await client.delete(f"/vacancies/{vacancy.id}", headers=auth_headers(admin))
        r = await client.delete(f"/vacancies/{vacancy.id}", headers=auth_headers(admin))
        assert r.status_code == 404
