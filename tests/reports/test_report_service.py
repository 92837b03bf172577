from __future__ import annotations

from datetime import date

import pytest

from conftest import TODAY
from epiviu.core.enums import Shift
from epiviu.core.exceptions import ValidationError
from epiviu.reports.model import Totals
from epiviu.reports.service import ReportService


@pytest.fixture
def hospital(container, admin):
    ana = container.staff_service.create_staff(actor=admin, name="Ana", shift="morning")
    bia = container.staff_service.create_staff(actor=admin, name="Bia", shift="afternoon")
    sectors = {
        "UTI 1": container.sector_service.create_sector(actor=admin, name="UTI 1", staff_id=ana),
        "UTI 2": container.sector_service.create_sector(actor=admin, name="UTI 2", staff_id=ana),
        "Pediatria": container.sector_service.create_sector(actor=admin, name="Pediatria", staff_id=bia),
    }
    return sectors


def _flag(container, admin, sector_id, day=TODAY):
    container.toggle_service.toggle_missed(actor=admin, sector_id=sector_id, visit_date=day)


def test_report_lists_every_sector_once_without_misses(container, hospital):
    data = container.report_service.report()

    assert (data.start_date, data.end_date) == (TODAY, TODAY)
    assert [(r.staff_name, r.sector_name, r.missed_date) for r in data.rows] == [
        ("Ana", "UTI 1", None),
        ("Ana", "UTI 2", None),
        ("Bia", "Pediatria", None),
    ]


def test_report_fans_out_one_row_per_missed_day(container, admin, hospital):
    uti1 = hospital["UTI 1"]
    _flag(container, admin, uti1, date(2024, 2, 27))
    _flag(container, admin, uti1, date(2024, 2, 28))
    _flag(container, admin, hospital["Pediatria"], date(2024, 1, 1))  # outside the range

    data = container.report_service.report(date(2024, 2, 26), date(2024, 2, 29))

    assert [(r.sector_name, r.missed_date) for r in data.rows] == [
        ("UTI 1", date(2024, 2, 27)),
        ("UTI 1", date(2024, 2, 28)),
        ("UTI 2", None),
        ("Pediatria", None),
    ]
    assert data.rows[0].to_dict() == {
        "staff_name": "Ana",
        "shift": "morning",
        "sector_name": "UTI 1",
        "missed_date": "2024-02-27",
    }


def test_report_rejects_inverted_range(container):
    with pytest.raises(ValidationError):
        container.report_service.report(date(2024, 3, 2), date(2024, 3, 1))
    with pytest.raises(ValidationError):
        container.report_service.resolve_range("2024-03-02", "2024-03-01")
    with pytest.raises(ValidationError):
        container.report_service.resolve_range("01/03/2024", None)


def test_resolve_range_defaults_to_today(container):
    assert container.report_service.resolve_range(None, "") == (TODAY, TODAY)
    assert container.report_service.resolve_range("2024-02-01", None) == (date(2024, 2, 1), TODAY)


def test_summary_totals_by_staff_and_shift(container, admin, hospital):
    _flag(container, admin, hospital["UTI 1"])

    summary = container.report_service.summary()

    assert summary.totals == Totals(total_sectors=3, missed_count=1, visited_count=2, visited_percent=67)
    assert [(s.staff_name, s.totals.missed_count, s.totals.visited_percent) for s in summary.by_staff] == [
        ("Ana", 1, 50),
        ("Bia", 0, 100),
    ]
    assert [s.shift for s in summary.by_shift] == [Shift.MORNING, Shift.AFTERNOON]
    out = summary.to_dict()
    assert out["start_date"] == "2024-03-01"
    assert out["totals"]["visited_percent"] == 67


def test_summary_of_empty_hospital(container):
    summary = container.report_service.summary()
    assert summary.totals == Totals(total_sectors=0, missed_count=0, visited_count=0, visited_percent=0)
    assert summary.by_staff == [] and summary.by_shift == []


def test_monthly_summary_covers_the_calendar_month(container, admin, hospital):
    _flag(container, admin, hospital["UTI 2"], date(2024, 2, 1))
    _flag(container, admin, hospital["UTI 2"], date(2024, 2, 29))
    _flag(container, admin, hospital["UTI 2"], date(2024, 3, 1))

    summary = container.report_service.monthly_summary("2024-02")

    assert (summary.start_date, summary.end_date) == (date(2024, 2, 1), date(2024, 2, 29))
    assert summary.totals.missed_count == 2
    with pytest.raises(ValidationError):
        container.report_service.monthly_summary("2024-13")


@pytest.mark.parametrize(
    "total, missed, percent",
    [(8, 1, 88), (8, 3, 63), (3, 2, 33), (1, 0, 100), (2, 1, 50), (200, 1, 100), (200, 199, 1)],
)
def test_visited_percent_rounds_half_up(total, missed, percent):
    assert Totals.from_counts(total, missed).visited_percent == percent


def test_daily_totals_counts_only_listed_sectors():
    assert ReportService.daily_totals([1, 2, 3], {2, 9}) == Totals.from_counts(3, 1)


def test_multi_day_misses_are_counted_in_sector_days(container, admin, hospital):
    for day in (1, 2, 3):
        _flag(container, admin, hospital["UTI 1"], date(2024, 2, day))

    summary = container.report_service.monthly_summary("2024-02")

    assert summary.totals == Totals(total_sectors=3, missed_count=3, visited_count=84, visited_percent=97, days=29)
    ana = summary.by_staff[0]
    assert (ana.staff_name, ana.totals.visited_count, ana.totals.visited_percent) == ("Ana", 55, 95)
    for subtotal in [summary.totals] + [s.totals for s in summary.by_staff + summary.by_shift]:
        assert 0 <= subtotal.visited_count
        assert 0 <= subtotal.visited_percent <= 100


def test_single_day_range_keeps_day_formula(container, admin, hospital):
    _flag(container, admin, hospital["UTI 1"], date(2024, 2, 10))

    summary = container.report_service.summary(date(2024, 2, 10), date(2024, 2, 10))

    assert summary.totals == Totals(total_sectors=3, missed_count=1, visited_count=2, visited_percent=67)
