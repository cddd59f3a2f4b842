"""
Tests for the job and company CRUD layer against SQLite.

Tests cover:
- Creation and duplicate detection
- Filtered listing and ordering
- Partial updates, including explicit nulls
- Deletion and not-found handling
"""

import pytest
from sqlalchemy import text

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.schemas.company import CompanyCreateRequest, CompanyFilter, CompanyUpdateRequest
from app.schemas.job import JobCreateRequest, JobFilter, JobUpdateRequest


def _titles(jobs):
    return [job["title"] for job in jobs]


class TestJobCreate:
    """Tests for job_crud.create"""

    def test_create(self, db_session, seeded):
        job = job_crud.create(db_session, JobCreateRequest(
            title="newJob", salary=50000, equity=0.5, company_handle="c1",
        ))

        assert isinstance(job["id"], int)
        assert job["title"] == "newJob"
        assert job["salary"] == 50000
        assert job["equity"] == 0.5
        assert job["company_handle"] == "c1"

    def test_duplicate_title(self, db_session, seeded):
        with pytest.raises(ConflictError):
            job_crud.create(db_session, JobCreateRequest(title="j1", company_handle="c2"))

    def test_unknown_company(self, db_session, seeded):
        with pytest.raises(InvalidInputError):
            job_crud.create(db_session, JobCreateRequest(title="x", company_handle="nope"))

    def test_session_usable_after_conflict(self, db_session, seeded):
        with pytest.raises(ConflictError):
            job_crud.create(db_session, JobCreateRequest(title="j1", company_handle="c1"))

        assert job_crud.get_by_title(db_session, "j1")["salary"] == 100000


class TestJobFindAll:
    """Tests for job_crud.find_all"""

    def test_no_filter(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, JobFilter())

        assert _titles(jobs) == ["j1", "j2", "j3"]
        assert [job["equity"] for job in jobs] == [0.0, 0.081, 0.032]
        assert all(isinstance(job["equity"], float) for job in jobs)

    def test_all_filters(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, JobFilter(title_contains="j", min_salary=150000, has_equity=True))

        assert _titles(jobs) == ["j2", "j3"]

    def test_title_is_case_insensitive(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, JobFilter(title_contains="J1"))

        assert _titles(jobs) == ["j1"]

    def test_min_salary(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, JobFilter(min_salary=300000))

        assert _titles(jobs) == ["j3"]

    def test_has_equity(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, JobFilter(has_equity=True))

        assert _titles(jobs) == ["j2", "j3"]

    def test_has_equity_false_returns_all(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, JobFilter(has_equity=False))

        assert _titles(jobs) == ["j1", "j2", "j3"]

    def test_no_match(self, db_session, seeded):
        assert job_crud.find_all(db_session, JobFilter(title_contains="zzz")) == []

    def test_created_job_found_with_float_equity(self, db_session):
        company_crud.create(db_session, CompanyCreateRequest(handle="c2", name="C2"))
        job_crud.create(db_session, JobCreateRequest(title="j1", salary=100000, equity=0, company_handle="c2"))
        job_crud.create(db_session, JobCreateRequest(
            title="j2", salary=150000, equity=0.081, company_handle="c2",
        ))

        jobs = job_crud.find_all(db_session, JobFilter(min_salary=150000, has_equity=True))

        assert len(jobs) == 1
        assert jobs[0]["title"] == "j2"
        assert jobs[0]["equity"] == 0.081
        assert isinstance(jobs[0]["equity"], float)


class TestJobGet:
    """Tests for job_crud.get and get_by_title"""

    def test_get_by_title(self, db_session, seeded):
        job = job_crud.get_by_title(db_session, "j1")

        assert job == {
            "id": seeded["j1"]["id"],
            "title": "j1",
            "salary": 100000,
            "equity": 0.0,
            "company_handle": "c1",
        }

    def test_get_by_id(self, db_session, seeded):
        assert job_crud.get(db_session, seeded["j2"]["id"])["title"] == "j2"

    def test_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.get_by_title(db_session, "fake job")

        with pytest.raises(NotFoundError):
            job_crud.get(db_session, 99999)


class TestJobUpdate:
    """Tests for job_crud.update"""

    def test_update(self, db_session, seeded):
        job = job_crud.update(db_session, seeded["j2"]["id"], JobUpdateRequest(
            title="New", salary=150500, equity=0.1,
        ))

        assert job["id"] == seeded["j2"]["id"]
        assert job["title"] == "New"
        assert job["salary"] == 150500
        assert job["equity"] == 0.1
        assert job["company_handle"] == "c2"

    def test_partial_update_leaves_other_fields(self, db_session, seeded):
        job = job_crud.update(db_session, seeded["j3"]["id"], JobUpdateRequest(salary=1))

        assert job["salary"] == 1
        assert job["title"] == "j3"
        assert job["equity"] == 0.032

    def test_null_fields(self, db_session, seeded):
        job_crud.update(db_session, seeded["j1"]["id"], JobUpdateRequest(salary=None, equity=None))

        job = job_crud.get_by_title(db_session, "j1")
        assert job["salary"] is None
        assert job["equity"] is None

    def test_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.update(db_session, 99999, JobUpdateRequest(salary=1))

        salaries = [job["salary"] for job in job_crud.find_all(db_session, JobFilter())]
        assert salaries == [100000, 150000, 400000]

    def test_no_data(self, db_session, seeded):
        with pytest.raises(InvalidInputError):
            job_crud.update(db_session, seeded["j1"]["id"], JobUpdateRequest())

    def test_rename_to_existing_title(self, db_session, seeded):
        with pytest.raises(ConflictError):
            job_crud.update(db_session, seeded["j1"]["id"], JobUpdateRequest(title="j2"))


class TestJobRemove:
    """Tests for job_crud.remove"""

    def test_remove(self, db_session, seeded):
        job_crud.remove(db_session, seeded["j1"]["id"])

        rows = db_session.execute(text("SELECT title FROM jobs WHERE title = 'j1'")).all()
        assert rows == []

    def test_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.remove(db_session, 99999)


class TestCompanies:
    """Tests for company_crud"""

    def test_find_all_ordered_by_name(self, db_session, seeded):
        companies = company_crud.find_all(db_session, CompanyFilter())

        assert [c["handle"] for c in companies] == ["c1", "c2", "c3"]

    def test_find_all_filtered(self, db_session, seeded):
        companies = company_crud.find_all(db_session, CompanyFilter(name_like="c", min_employees=2, max_employees=2))

        assert [c["handle"] for c in companies] == ["c2"]

    def test_get_includes_jobs(self, db_session, seeded):
        company = company_crud.get(db_session, "c2")

        assert company["name"] == "C2"
        assert company["num_employees"] == 2
        assert company["jobs"] == [{
            "id": seeded["j2"]["id"],
            "title": "j2",
            "salary": 150000,
            "equity": 0.081,
        }]

    def test_update_maps_columns(self, db_session, seeded):
        company = company_crud.update(db_session, "c1", CompanyUpdateRequest(
            num_employees=10, logo_url=None,
        ))

        assert company["num_employees"] == 10
        assert company["logo_url"] is None
        assert company["name"] == "C1"

    def test_duplicate_handle(self, db_session, seeded):
        with pytest.raises(ConflictError):
            company_crud.create(db_session, CompanyCreateRequest(handle="c1", name="Other"))

    def test_remove_cascades_to_jobs(self, db_session, seeded):
        company_crud.remove(db_session, "c1")

        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "c1")
        with pytest.raises(NotFoundError):
            job_crud.get_by_title(db_session, "j1")

    def test_remove_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            company_crud.remove(db_session, "nope")
