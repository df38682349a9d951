"""Unit tests for the university catalog and its grouping"""

from catalog import CATALOG, get_university, normalize_country, offers_program, query_universities
from classifier import classify_universities
from models import CategoryEnum


def test_catalog_ids_are_unique():
    ids = [u.id for u in CATALOG]
    assert len(ids) == len(set(ids))


def test_total_cost_is_tuition_plus_living():
    for uni in CATALOG:
        assert uni.total_cost == uni.tuition_fee + uni.living_cost
    assert get_university("uni-mit").model_dump()["total_cost"] == 79000


def test_get_university_unknown_id():
    assert get_university("uni-atlantis") is None


def test_normalize_country_aliases():
    assert normalize_country("USA") == "United States"
    assert normalize_country("us") == "United States"
    assert normalize_country(" Great Britain ") == "United Kingdom"
    assert normalize_country("Japan") == "Japan"
    assert normalize_country("") == ""


def test_offers_program_is_case_insensitive():
    assert offers_program(get_university("uni-cmu"), "computer SCIENCE")
    assert not offers_program(get_university("uni-cmu"), "Medicine")


def test_query_without_countries_means_any():
    results = query_universities(countries=[], field_of_study="Medicine")

    assert [u.id for u in results] == ["uni-melbourne"]


def test_query_limit_and_order():
    results = query_universities(countries=["Canada"], limit=2)

    assert [u.id for u in results] == ["uni-toronto", "uni-ubc"]


def test_query_accepts_single_country_string():
    results = query_universities(countries="Australia")

    assert {u.id for u in results} == {"uni-melbourne", "uni-monash"}


def test_classify_universities_buckets():
    grouped = classify_universities(CATALOG)

    assert set(grouped) == {"dream", "target", "safe"}
    assert sum(len(v) for v in grouped.values()) == len(CATALOG)
    for category, universities in grouped.items():
        assert all(u.category == CategoryEnum(category) for u in universities)
