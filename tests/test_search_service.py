"""Tests for search orchestration."""

import asyncio

import pytest

from food_scanner.services.search import FoodRepositoryError, SearchService


@pytest.fixture
def search_service(food_repository, recent_searches, notices) -> SearchService:
    return SearchService(
        repository=food_repository,
        recent_searches=recent_searches,
        notices=notices,
        debounce_seconds=0.05,
    )


def test_search_records_only_first_result(search_service, recent_searches) -> None:
    results = asyncio.run(search_service.search("  apple "))

    assert [food.name for food in results] == ["Apple", "Apple juice"]
    entries = asyncio.run(recent_searches.load())
    assert [entry.food.id for entry in entries] == ["1"]


def test_short_or_empty_query_skips_remote(
    search_service, food_repository, recent_searches
) -> None:
    assert asyncio.run(search_service.search("")) == []
    assert asyncio.run(search_service.search(" a ")) == []

    assert food_repository.search_calls == []
    assert asyncio.run(recent_searches.load()) == []


def test_search_without_results_records_nothing(
    search_service, recent_searches
) -> None:
    assert asyncio.run(search_service.search("pizza")) == []
    assert asyncio.run(recent_searches.load()) == []


def test_search_failure_becomes_notice(
    search_service, food_repository, notices
) -> None:
    food_repository.fail_search = True

    assert asyncio.run(search_service.search("apple")) == []
    assert [notice.message for notice in notices.drain()] == ["Could not load results"]


def test_search_as_you_type_keeps_latest_query(
    search_service, food_repository
) -> None:
    async def run() -> tuple[object, object]:
        first = asyncio.create_task(search_service.search_as_you_type("ap"))
        await asyncio.sleep(0)
        second = asyncio.create_task(search_service.search_as_you_type("banana"))
        return await first, await second

    first, second = asyncio.run(run())

    assert first is None
    assert [food.name for food in second] == ["Banana"]
    assert food_repository.search_calls == ["banana"]


def test_scan_found_records_product(search_service, recent_searches) -> None:
    result = asyncio.run(search_service.scan("8410000000011"))

    assert result.food is not None
    assert result.food.name == "Apple"
    assert not result.can_register
    assert asyncio.run(recent_searches.load())[0].food.id == "1"


def test_scan_unknown_barcode_offers_registration(
    search_service, recent_searches
) -> None:
    result = asyncio.run(search_service.scan("0000"))

    assert result.food is None
    assert result.can_register
    assert result.barcode == "0000"
    assert asyncio.run(recent_searches.load()) == []


def test_scan_remote_failure_propagates(search_service, food_repository) -> None:
    food_repository.fail_lookup = True

    with pytest.raises(FoodRepositoryError):
        asyncio.run(search_service.scan("8410000000011"))


def test_register_and_update(search_service) -> None:
    created = search_service.register(
        {"codigo": "0000", "nombre": "Oat bar", "calorias": 180}
    )
    assert created is not None
    assert created.barcode == "0000"

    updated = search_service.update(created.id, {"azucares": 12})
    assert updated is not None
    assert updated.sugars == 12
    assert search_service.update("missing", {"azucares": 1}) is None
