"""Search use case against both repository implementations."""
from datetime import datetime, timedelta

import pytest

from catalog.application.services.attraction_query_builder import normalize
from catalog.application.use_cases.search_attractions import (
    ListCategoryAttractionsUseCase,
    SearchAttractionsUseCase,
)
from catalog.domain.errors import NotFoundError
from catalog.domain.value_objects.attraction_filter import AccessibilityFlag, AttractionFilter, SortMode
from tests.conftest import create_category, create_user, make_attraction

T0 = datetime(2024, 1, 1, 9, 0, 0)


async def seed_catalog(repos):
    """Small catalog: two categories, two stations, five attractions (one draft)."""
    admin = await create_user(repos.users, email="admin@example.com")
    museums = await create_category(repos.categories, "Museums")
    parks = await create_category(repos.categories, "Parks")
    nevsky = repos.add_station("Nevsky Prospekt")
    gorkovskaya = repos.add_station("Gorkovskaya", line_color="purple")

    specs = [
        ("State Hermitage", museums, nevsky, dict(
            district="Central", wheelchair_accessible=True, has_elevator=True, has_audio_guide=True)),
        ("Summer Garden", parks, nevsky, dict(
            district="Central", full_description="Garden next to the HERMITAGE theatre, " + "x" * 40)),
        ("Peter and Paul Fortress", museums, gorkovskaya, dict(
            district="Petrogradsky", has_audio_guide=True)),
        ("Alexander Park", parks, gorkovskaya, dict(
            district="Petrogradsky", short_description="A park near the hermitage annex, not really",
            has_sign_language_support=True)),
        ("Hidden Draft", museums, None, dict(is_published=False, district="Central")),
    ]
    created = {}
    for i, (name, category, station, extra) in enumerate(specs):
        created[name] = await repos.attractions.create(make_attraction(
            name,
            category_id=category.id,
            created_by=admin.id,
            metro_station_id=station.id if station else None,
            created_at=T0 + timedelta(days=i),
            **extra,
        ))
    return {
        "admin": admin,
        "museums": museums,
        "parks": parks,
        "nevsky": nevsky,
        "gorkovskaya": gorkovskaya,
        "attractions": created,
    }


def names(result):
    return [a.name for a in result.items]


async def test_default_search_returns_published_sorted_by_name(repos):
    await seed_catalog(repos)
    result = await SearchAttractionsUseCase(repos.attractions).execute(AttractionFilter())
    assert names(result) == ["Alexander Park", "Peter and Paul Fortress", "State Hermitage", "Summer Garden"]
    assert result.total_items == 4
    assert result.total_pages == 1


@pytest.mark.parametrize("raw", [
    {},
    {"search": "draft"},
    {"category": "1"},
    {"district": "Central"},
    {"sort": "newest", "limit": "1", "page": "5"},
    {"accessibility": "wheelchair"},
])
async def test_public_search_never_returns_drafts(repos, raw):
    await seed_catalog(repos)
    result = await SearchAttractionsUseCase(repos.attractions).execute(normalize(raw))
    assert all(a.is_published for a in result.items)
    assert "Hidden Draft" not in names(result)


async def test_admin_search_includes_drafts(repos):
    await seed_catalog(repos)
    result = await SearchAttractionsUseCase(repos.attractions).execute(
        AttractionFilter(), include_unpublished=True
    )
    assert "Hidden Draft" in names(result)
    assert result.total_items == 5


async def test_search_matches_name_or_descriptions_case_insensitively(repos):
    await seed_catalog(repos)
    result = await SearchAttractionsUseCase(repos.attractions).execute(
        AttractionFilter(search_text="hermitage")
    )
    # name, full description and short description matches respectively
    assert names(result) == ["Alexander Park", "State Hermitage", "Summer Garden"]
    for attraction in result.items:
        haystack = " ".join([attraction.name, attraction.short_description, attraction.full_description])
        assert "hermitage" in haystack.lower()


async def test_search_wildcards_are_literal(repos):
    await seed_catalog(repos)
    result = await SearchAttractionsUseCase(repos.attractions).execute(AttractionFilter(search_text="%"))
    assert result.total_items == 0
    result = await SearchAttractionsUseCase(repos.attractions).execute(AttractionFilter(search_text="_"))
    assert result.total_items == 0


async def test_category_and_metro_are_equality_constraints(repos):
    data = await seed_catalog(repos)
    use_case = SearchAttractionsUseCase(repos.attractions)

    by_category = await use_case.execute(AttractionFilter(category_id=data["parks"].id))
    assert names(by_category) == ["Alexander Park", "Summer Garden"]

    by_metro = await use_case.execute(AttractionFilter(metro_station_id=data["gorkovskaya"].id))
    assert names(by_metro) == ["Alexander Park", "Peter and Paul Fortress"]

    both = await use_case.execute(AttractionFilter(
        category_id=data["museums"].id, metro_station_id=data["nevsky"].id,
    ))
    assert names(both) == ["State Hermitage"]


async def test_district_is_substring_match(repos):
    await seed_catalog(repos)
    result = await SearchAttractionsUseCase(repos.attractions).execute(AttractionFilter(district="petro"))
    assert names(result) == ["Alexander Park", "Peter and Paul Fortress"]


@pytest.mark.parametrize("flag, expected", [
    (AccessibilityFlag.WHEELCHAIR, ["State Hermitage"]),
    (AccessibilityFlag.ELEVATOR, ["State Hermitage"]),
    (AccessibilityFlag.AUDIO, ["Peter and Paul Fortress", "State Hermitage"]),
    (AccessibilityFlag.SIGN_LANGUAGE, ["Alexander Park"]),
])
async def test_accessibility_flags_filter(repos, flag, expected):
    await seed_catalog(repos)
    result = await SearchAttractionsUseCase(repos.attractions).execute(
        AttractionFilter(accessibility_flag=flag)
    )
    assert names(result) == expected


@pytest.mark.parametrize("mode, expected", [
    (SortMode.NEWEST, ["Alexander Park", "Peter and Paul Fortress", "Summer Garden", "State Hermitage"]),
    (SortMode.OLDEST, ["State Hermitage", "Summer Garden", "Peter and Paul Fortress", "Alexander Park"]),
    (SortMode.CATEGORY, ["Peter and Paul Fortress", "State Hermitage", "Alexander Park", "Summer Garden"]),
])
async def test_sort_modes(repos, mode, expected):
    await seed_catalog(repos)
    result = await SearchAttractionsUseCase(repos.attractions).execute(AttractionFilter(sort_mode=mode))
    assert names(result) == expected


async def test_equal_names_tie_break_by_id(repos):
    admin = await create_user(repos.users)
    category = await create_category(repos.categories, "Bridges")
    first = await repos.attractions.create(make_attraction("Bridge", category.id, admin.id, slug="bridge-1"))
    second = await repos.attractions.create(make_attraction("Bridge", category.id, admin.id, slug="bridge-2"))
    result = await SearchAttractionsUseCase(repos.attractions).execute(AttractionFilter())
    assert [a.id for a in result.items] == [first.id, second.id]


async def test_pagination_window(repos):
    await seed_catalog(repos)
    use_case = SearchAttractionsUseCase(repos.attractions)

    page_one = await use_case.execute(AttractionFilter(limit=3))
    assert names(page_one) == ["Alexander Park", "Peter and Paul Fortress", "State Hermitage"]
    assert (page_one.total_items, page_one.total_pages) == (4, 2)
    assert page_one.has_next_page and not page_one.has_prev_page

    page_two = await use_case.execute(AttractionFilter(limit=3, page=2))
    assert names(page_two) == ["Summer Garden"]
    assert not page_two.has_next_page and page_two.has_prev_page

    beyond = await use_case.execute(AttractionFilter(limit=3, page=9))
    assert beyond.items == []
    assert beyond.total_items == 4


async def test_listing_attaches_relations_and_only_primary_image(repos):
    data = await seed_catalog(repos)
    hermitage = data["attractions"]["State Hermitage"]
    repos.add_image(hermitage.id, "facade.jpg")
    repos.add_image(hermitage.id, "main.jpg", is_primary=True)
    repos.add_image(hermitage.id, "hall.jpg")

    result = await SearchAttractionsUseCase(repos.attractions).execute(
        AttractionFilter(search_text="State Hermitage")
    )
    listed = result.items[0]
    assert listed.category.name == "Museums"
    assert listed.metro_station.name == "Nevsky Prospekt"
    assert [image.filename for image in listed.images] == ["main.jpg"]

    detail = await repos.attractions.get_by_id(hermitage.id)
    assert [image.filename for image in detail.images] == ["main.jpg", "facade.jpg", "hall.jpg"]


async def test_listing_without_primary_image_has_no_images(repos):
    data = await seed_catalog(repos)
    garden = data["attractions"]["Summer Garden"]
    repos.add_image(garden.id, "gate.jpg")
    result = await SearchAttractionsUseCase(repos.attractions).execute(
        AttractionFilter(search_text="Summer Garden")
    )
    assert result.items[0].images == []
    assert result.items[0].primary_image is None


async def test_category_listing_requires_existing_category(repos):
    data = await seed_catalog(repos)
    use_case = ListCategoryAttractionsUseCase(repos.attractions, repos.categories)

    category, result = await use_case.execute(data["parks"].id, AttractionFilter(category_id=999))
    assert category.name == "Parks"
    assert names(result) == ["Alexander Park", "Summer Garden"]

    with pytest.raises(NotFoundError):
        await use_case.execute(999, AttractionFilter())
