import pytest

from app.services.job_query import (
    UNFILTERED,
    EqualsValue,
    JobQuery,
    SortOrder,
    compile_job_query,
    count_pages,
    parse_filter,
    parse_positive_int,
    parse_search,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 7),
        ("", 7),
        ("abc", 7),
        ("0", 7),
        ("-3", 7),
        ("2.5", 7),
        ("4", 4),
        (" 12 ", 12),
        (3, 3),
    ],
)
def test_parse_positive_int_falls_back_on_bad_input(raw, expected):
    assert parse_positive_int(raw, 7) == expected


def test_parse_search_treats_blank_as_absent():
    assert parse_search(None) is None
    assert parse_search("   ") is None
    assert parse_search(" dev ") == "dev"


def test_parse_filter_variants():
    allowed = ("pending", "interview", "declined")
    assert parse_filter(None, allowed) == UNFILTERED
    assert parse_filter("all", allowed) == UNFILTERED
    assert parse_filter("archived", allowed) == UNFILTERED
    assert parse_filter("interview", allowed) == EqualsValue("interview")


def test_sort_order_resolution():
    assert SortOrder.parse("latest") is SortOrder.LATEST
    assert SortOrder.parse(None) is SortOrder.LATEST
    assert SortOrder.parse("newest-first") is SortOrder.LATEST
    assert (SortOrder.LATEST.field, SortOrder.LATEST.descending) == ("created_at", True)
    assert (SortOrder.OLDEST.field, SortOrder.OLDEST.descending) == ("created_at", False)
    assert (SortOrder.A_Z.field, SortOrder.A_Z.descending) == ("position", False)
    assert (SortOrder.Z_A.field, SortOrder.Z_A.descending) == ("position", True)


def test_compile_defaults_only_scope_by_owner():
    q = compile_job_query("u1")
    assert q == JobQuery(created_by="u1")
    assert q.status == UNFILTERED and q.job_type == UNFILTERED
    assert (q.page, q.limit, q.skip) == (1, 10, 0)


def test_compile_full_parameters():
    q = compile_job_query(
        "u1",
        search="eng",
        status="declined",
        job_type="remote",
        sort="z-a",
        page="3",
        limit="5",
    )
    assert q.search == "eng"
    assert q.status == EqualsValue("declined")
    assert q.job_type == EqualsValue("remote")
    assert q.sort is SortOrder.Z_A
    assert q.skip == 10


def test_compile_ignores_unknown_job_type_and_bad_paging():
    q = compile_job_query("u1", job_type="contract", status="all", page="x", limit="-1")
    assert q.job_type == UNFILTERED
    assert q.status == UNFILTERED
    assert (q.page, q.limit) == (1, 10)


@pytest.mark.parametrize("total, limit, pages", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (25, 10, 3), (25, 5, 5)])
def test_count_pages(total, limit, pages):
    assert count_pages(total, limit) == pages


@pytest.mark.parametrize("raw", ["1_000", "+5", "٣", "１２"])
def test_parse_positive_int_only_takes_ascii_digits(raw):
    assert parse_positive_int(raw, 10) == 10


def test_parse_positive_int_saturates_huge_values():
    assert parse_positive_int("0007", 10) == 7
    assert parse_positive_int("99999999999999999999", 10) == 2**63 - 1
    assert parse_positive_int("9" * 5000, 10) == 2**63 - 1
