import random

import pytest
from conftest import FakeRenderer

from jobcrawler.models.crawl_model import CrawlStatus
from jobcrawler.services.crawl_orchestrator import CrawlOrchestrator
from jobcrawler.services.detail_fetcher import DetailFetcher
from jobcrawler.services.listing_walker import ListingWalker


def make_orchestrator(renderer, settings, sleep) -> CrawlOrchestrator:
    return CrawlOrchestrator(
        renderer,
        settings,
        walker=ListingWalker(renderer, settings, sleep=sleep, rng=random.Random(1)),
        fetcher=DetailFetcher(renderer, settings, sleep=sleep, rng=random.Random(2)),
    )


class TestCrawlOrchestrator:
    def test_full_run_with_mixed_outcomes(self, site_renderer, fast_settings, sleep):
        result = make_orchestrator(site_renderer, fast_settings, sleep).run("バックエンドエンジニア", "東京都", 2)

        assert result.status is CrawlStatus.PARTIAL
        assert [record.job_id for record in result.records] == ["a1b2c3", "d4e5f6"]
        assert result.search_query == "バックエンドエンジニア"
        assert result.location == "東京都"
        assert result.pages_scanned == 2
        assert result.error is None
        assert result.counts.to_dict() == {
            "pagesAttempted": 2,
            "pagesSucceeded": 2,
            "pagesFailed": 0,
            "idsFound": 4,
            "detailsAttempted": 4,
            "detailsSucceeded": 2,
            "detailsSkipped": 1,
            "detailsFailed": 1,
        }

    def test_clean_run_succeeds(self, fast_settings, sleep):
        renderer = FakeRenderer(
            listings={0: '<a data-jk="a1b2c3"></a>'},
            details={"a1b2c3": '<h1 class="jobsearch-JobInfoHeader-title">SRE</h1>'},
        )
        result = make_orchestrator(renderer, fast_settings, sleep).run("SRE", "東京都", 1)
        assert result.status is CrawlStatus.SUCCEEDED
        assert len(result.records) == 1

    def test_renderer_released_after_run(self, site_renderer, fast_settings, sleep):
        make_orchestrator(site_renderer, fast_settings, sleep).run("エンジニア", "東京都", 1)
        assert site_renderer.open_calls == 1
        assert site_renderer.close_calls == 1
        assert not site_renderer.is_open

    def test_renderer_released_when_walk_raises(self, site_renderer, fast_settings, sleep):
        orchestrator = make_orchestrator(site_renderer, fast_settings, sleep)

        def explode(run):
            raise RuntimeError("walker bug")

        orchestrator.walker.walk = explode
        with pytest.raises(RuntimeError):
            orchestrator.run("エンジニア", "東京都", 1)
        assert site_renderer.close_calls == 1

    def test_acquisition_failure(self, fast_settings, sleep):
        renderer = FakeRenderer(fail_open=True)
        result = make_orchestrator(renderer, fast_settings, sleep).run("エンジニア", "東京都", 3)

        assert result.status is CrawlStatus.FAILED
        assert result.records == []
        assert "chrome not found" in result.error
        assert result.pages_scanned == 0
        assert renderer.rendered == []

    def test_page_ceiling(self, site_renderer, fast_settings, sleep):
        settings = fast_settings.model_copy(update={"MAX_PAGES": 1})
        make_orchestrator(site_renderer, settings, sleep).run("エンジニア", "東京都", 5)
        listing_urls = [url for url in site_renderer.rendered if "/jobs?" in url]
        assert len(listing_urls) == 1

    def test_blank_query_uses_defaults(self, site_renderer, fast_settings, sleep):
        result = make_orchestrator(site_renderer, fast_settings, sleep).run("  ", None, 1)
        assert result.search_query == fast_settings.DEFAULT_SEARCH_QUERY
        assert result.location == fast_settings.DEFAULT_LOCATION

    def test_no_ids_means_no_detail_pages(self, fast_settings, sleep):
        renderer = FakeRenderer(listings={0: "<html><body></body></html>"})
        result = make_orchestrator(renderer, fast_settings, sleep).run("エンジニア", "東京都", 1)
        assert result.records == []
        assert result.status is CrawlStatus.SUCCEEDED
        assert all("/viewjob" not in url for url in renderer.rendered)

    def test_same_pages_give_same_records(self, site_renderer, fast_settings, sleep):
        orchestrator = make_orchestrator(site_renderer, fast_settings, sleep)
        first = orchestrator.run("エンジニア", "東京都", 2)
        second = orchestrator.run("エンジニア", "東京都", 2)
        assert [r.model_dump_json() for r in first.records] == [r.model_dump_json() for r in second.records]
