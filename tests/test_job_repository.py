import pytest
from pydantic import ValidationError

from jobcrawler.models.company_model import CompanyProfile
from jobcrawler.models.job_model import JobFilters, JobRecord
from jobcrawler.services.job_repository import JobRepository
from jobcrawler.services.mock_jobs import build_mock_jobs, load_mock_jobs


def make_record(job_id: str, title: str, company: str = "株式会社サンプル", **kwargs) -> JobRecord:
    return JobRecord(
        job_id=job_id,
        title=title,
        original_url=f"https://jp.indeed.com/viewjob?jk={job_id}",
        company_name=company,
        company=CompanyProfile(name=company, **kwargs.pop("company_fields", {})),
        **kwargs,
    )


@pytest.fixture
def repository() -> JobRepository:
    return JobRepository()


class TestSave:
    def test_assigns_ids_and_timestamps(self, repository):
        job_id = repository.save(make_record("a1", "バックエンドエンジニア"))
        stored = repository.get(job_id)
        assert stored.id == job_id == 1
        assert stored.job_id == "a1"
        assert stored.status == "active"
        assert stored.created_at and stored.created_at == stored.updated_at
        assert repository.get_company(stored.company_id).name == "株式会社サンプル"

    def test_same_url_is_stored_once(self, repository):
        first = repository.save(make_record("a1", "バックエンドエンジニア"))
        second = repository.save(make_record("a1", "別タイトル"))
        assert first == second
        assert len(repository) == 1
        assert repository.get(first).title == "バックエンドエンジニア"

    def test_company_upsert_overwrites_by_name(self, repository):
        repository.save(make_record("a1", "SRE", company_fields={"industry": "IT / AI"}))
        repository.save(make_record("a2", "QA", company_fields={"industry": "IT / インターネット"}))

        first, second = repository.get(1), repository.get(2)
        assert first.company_id == second.company_id
        assert repository.get_company(first.company_id).industry == "IT / インターネット"

    def test_record_without_company(self, repository):
        job_id = repository.save(JobRecord(job_id="x", title="エンジニア"))
        assert repository.get(job_id).company_id is None

    def test_get_unknown(self, repository):
        assert repository.get(99) is None

    @pytest.mark.parametrize("job_id, title", [("", "SRE"), ("a1", ""), ("", "")])
    def test_record_needs_identifier_and_title(self, repository, job_id, title):
        with pytest.raises(ValidationError):
            repository.save(JobRecord(job_id=job_id, title=title))
        assert len(repository) == 0


class TestSaveRecords:
    def test_skips_ids_already_stored(self, repository):
        repository.save(make_record("a1", "SRE"))
        summary = repository.save_records([make_record("a1", "SRE"), make_record("a2", "QA")])
        assert summary.to_dict() == {"saved": 1, "skipped": 1, "failed": 0}
        assert repository.find_existing("a2")

    def test_bad_record_does_not_stop_the_batch(self, repository):
        class Broken:
            job_id = "broken"
            title = "broken"
            original_url = "https://jp.indeed.com/viewjob?jk=broken"
            company_name = ""

            @property
            def company(self):
                raise RuntimeError("corrupt record")

        summary = repository.save_records([Broken(), make_record("a2", "QA")])
        assert summary.saved == 1
        assert summary.failed == 1


class TestFind:
    @pytest.fixture(autouse=True)
    def seed(self, repository):
        load_mock_jobs(repository)

    def test_newest_first(self, repository):
        page = repository.find()
        assert [job.job_id for job in page.data] == ["mock003", "mock002", "mock001"]
        assert page.total == 3
        assert page.total_pages == 1

    def test_search_is_case_insensitive(self, repository):
        page = repository.find(JobFilters(search="devops"))
        assert [job.job_id for job in page.data] == ["mock003"]

    def test_search_matches_company_name(self, repository):
        assert repository.find(JobFilters(search="sportip")).total == 1

    def test_combined_filters(self, repository):
        page = repository.find(JobFilters(industry="インターネット", company_type="startup"))
        assert [job.job_id for job in page.data] == ["mock002"]

    def test_location_filter(self, repository):
        assert repository.find(JobFilters(location="フルリモート")).total == 1
        assert repository.find(JobFilters(location="大阪")).total == 0

    def test_pagination(self, repository):
        page = repository.find(JobFilters(page=2, limit=2))
        assert [job.job_id for job in page.data] == ["mock001"]
        assert page.total == 3
        assert page.total_pages == 2

    def test_page_beyond_results(self, repository):
        page = repository.find(JobFilters(page=5, limit=2))
        assert page.data == []
        assert page.total == 3

    def test_mock_jobs_load_once(self, repository):
        assert load_mock_jobs(repository) == 0
        assert len(repository) == len(build_mock_jobs())

    def test_clear(self, repository):
        repository.clear()
        assert len(repository) == 0
        assert repository.find().total_pages == 0
