import pytest

from jobcrawler.models.job_model import SalaryPeriod
from jobcrawler.services.salary import detect_period, parse_salary


class TestParseSalary:
    def test_annual_range_in_man_yen(self):
        salary = parse_salary("500〜800万円")
        assert salary.min == 5_000_000
        assert salary.max == 8_000_000
        assert salary.currency == "JPY"
        assert salary.period is SalaryPeriod.ANNUAL
        assert salary.display == "500〜800万円"

    def test_hourly_single_value_with_thousands_separator(self):
        salary = parse_salary("時給1,200円")
        assert salary.min == 1200
        assert salary.max is None
        assert salary.period is SalaryPeriod.HOURLY

    def test_monthly_open_ended(self):
        salary = parse_salary("月給30万円以上")
        assert salary.min == 300_000
        assert salary.max is None
        assert salary.period is SalaryPeriod.MONTHLY

    def test_full_width_digits_and_tilde(self):
        salary = parse_salary("年収４００万円～６００万円")
        assert (salary.min, salary.max) == (4_000_000, 6_000_000)
        assert salary.period is SalaryPeriod.ANNUAL

    def test_annual_fixed(self):
        salary = parse_salary("年俸 600万円 〜 900万円")
        assert (salary.min, salary.max) == (6_000_000, 9_000_000)
        assert salary.period is SalaryPeriod.ANNUAL_FIXED

    def test_plain_yen_amount_is_not_scaled(self):
        salary = parse_salary("月給250,000円〜350,000円")
        assert (salary.min, salary.max) == (250_000, 350_000)

    def test_keyword_without_number_keeps_display_only(self):
        salary = parse_salary("給与は経験・能力を考慮の上決定")
        assert salary is not None
        assert salary.display == "給与は経験・能力を考慮の上決定"
        assert salary.currency == "JPY"
        assert salary.min is None
        assert salary.max is None
        assert salary.period is None

    @pytest.mark.parametrize("text", [None, "", "   ", "経験者優遇"])
    def test_nothing_salary_like_returns_none(self, text):
        assert parse_salary(text) is None


class TestDetectPeriod:
    def test_monthly_wins_over_annual_markers(self):
        assert detect_period("月給25万円（年収300万円以上）") is SalaryPeriod.MONTHLY

    def test_default_is_annual(self):
        assert detect_period("400万円〜") is SalaryPeriod.ANNUAL
