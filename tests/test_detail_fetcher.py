from conftest import FakeRenderer, load_fixture

from jobcrawler.models.crawl_model import CrawlRun, StageOutcome
from jobcrawler.models.job_model import SalaryPeriod
from jobcrawler.services.detail_fetcher import DetailFetcher, build_detail_url, build_job_record

DETAIL_URL = "https://jp.indeed.com/viewjob?jk=a1b2c3"


def make_run(job_ids) -> CrawlRun:
    run = CrawlRun(search_query="エンジニア", location="東京都", requested_pages=1, page_count=1)
    run.add_job_ids(job_ids)
    return run


class TestBuildJobRecord:
    def test_script_payload_page(self, detail_html):
        record = build_job_record(detail_html, "a1b2c3", DETAIL_URL)

        assert record.job_id == "a1b2c3"
        assert record.title == "バックエンドエンジニア（Python/AWS）"
        assert record.company_name == "株式会社テックフロンティア"
        assert record.location == "東京都 渋谷区"
        assert record.original_url == DETAIL_URL
        assert record.role_type == "Infrastructure/DevOps"

        company = record.company
        assert (company.industry, company.sub_industry) == ("IT / インターネット", "SaaS / クラウド")
        assert company.company_type == "Mid-size"
        assert company.characteristics.size == "~45名"
        assert company.technologies.backend == ["Python", "PostgreSQL", "Django"]
        assert company.technologies.infrastructure == ["AWS", "Docker"]
        assert company.website == "https://jp.indeed.com/cmp/Tech-Frontier"

        assert record.salary.min == 5_000_000
        assert record.salary.max == 8_000_000
        assert record.salary.period is SalaryPeriod.ANNUAL
        assert record.salary.employment_type == "正社員"

        assert record.requirements.experience == "3年以上"
        assert record.requirements.languages == ["英語"]
        assert "Python" in record.requirements.skills

        assert record.benefits.welfare == ["社会保険完備"]
        assert record.benefits.vacation == ["完全週休2日制"]
        assert record.benefits.development == ["書籍購入補助"]

        metadata = record.metadata
        assert metadata.employment_type == "正社員"
        assert metadata.is_remote and metadata.is_urgent and metadata.is_new_job
        assert not metadata.is_sponsored
        assert metadata.work_schedule == "フレックスタイム"
        assert metadata.tags == ["リモートワーク可", "フレックスタイム", "交通費支給", "急募"]
        assert record.benefits.tags == metadata.tags

    def test_dom_only_page(self, detail_dom_html):
        record = build_job_record(detail_dom_html, "d4e5f6", "https://jp.indeed.com/viewjob?jk=d4e5f6")

        assert record.title == "フロントエンドエンジニア"
        assert record.location == "大阪府 大阪市"
        assert record.role_type == "Frontend"
        assert record.company.industry == "IT / インターネット"
        assert record.company.sub_industry == "Webサービス開発"
        assert record.company.website == "https://www.sample-lab.co.jp/"

        assert record.salary.min == 300_000
        assert record.salary.max is None
        assert record.salary.period is SalaryPeriod.MONTHLY
        assert record.salary.employment_type == "契約社員"

        assert record.requirements.experience == "未経験可"
        assert record.metadata.is_remote
        assert record.metadata.tags == ["リモートワーク可", "副業OK", "土日祝休み"]
        assert record.benefits.work_style == ["在宅勤務", "副業可"]

    def test_missing_title_is_discarded(self):
        assert build_job_record(load_fixture("detail_page_no_title.html"), "g7h8i9", DETAIL_URL) is None

    def test_missing_identifier_is_discarded(self, detail_html):
        assert build_job_record(detail_html, "", DETAIL_URL) is None

    def test_no_salary_text(self):
        html = "<h1 class=\"jobsearch-JobInfoHeader-title\">QAエンジニア</h1><p>テスト設計と自動化</p>"
        record = build_job_record(html, "x1", DETAIL_URL)
        assert record.title == "QAエンジニア"
        assert record.salary is None
        assert record.company_name == ""

    def test_deterministic(self, detail_html):
        first = build_job_record(detail_html, "a1b2c3", DETAIL_URL)
        second = build_job_record(detail_html, "a1b2c3", DETAIL_URL)
        assert first.model_dump_json() == second.model_dump_json()


class TestDetailFetcher:
    def test_each_item_outcome(self, site_renderer, fast_settings, sleep):
        fetcher = DetailFetcher(site_renderer, fast_settings, sleep=sleep)
        run = make_run(["a1b2c3", "d4e5f6", "g7h8i9", "j0k1l2"])

        records = fetcher.fetch_all(run)

        assert [record.job_id for record in records] == ["a1b2c3", "d4e5f6"]
        outcomes = [result.outcome for result in run.detail_results]
        assert outcomes == [StageOutcome.SUCCESS, StageOutcome.SUCCESS, StageOutcome.SKIPPED, StageOutcome.FAILED]
        assert run.detail_results[2].error == "missing title"
        assert "timed out" in run.detail_results[3].error
        assert run.counts.details_attempted == 4
        assert len(sleep.calls) == 3

    def test_failure_does_not_stop_later_items(self, fast_settings, sleep):
        renderer = FakeRenderer(details={
            "bad": RuntimeError("tab crashed"),
            "good": load_fixture("detail_page.html"),
        })
        run = make_run(["bad", "good"])
        records = DetailFetcher(renderer, fast_settings, sleep=sleep).fetch_all(run)
        assert [record.job_id for record in records] == ["good"]
        assert run.counts.details_failed == 1

    def test_items_per_run_cap(self, site_renderer, fast_settings, sleep):
        settings = fast_settings.model_copy(update={"MAX_ITEMS_PER_RUN": 2})
        run = make_run(["a1b2c3", "d4e5f6", "g7h8i9", "j0k1l2"])

        DetailFetcher(site_renderer, settings, sleep=sleep).fetch_all(run)

        assert run.counts.details_attempted == 2
        assert site_renderer.rendered == [
            build_detail_url(settings.BASE_URL, "a1b2c3"),
            build_detail_url(settings.BASE_URL, "d4e5f6"),
        ]
        assert len(run.records) <= run.counts.details_attempted

    def test_fetch_one_success(self, site_renderer, fast_settings):
        result = DetailFetcher(site_renderer, fast_settings).fetch_one("a1b2c3")
        assert result.outcome is StageOutcome.SUCCESS
        assert result.url == "https://jp.indeed.com/viewjob?jk=a1b2c3"
        assert result.record.title == "バックエンドエンジニア（Python/AWS）"
