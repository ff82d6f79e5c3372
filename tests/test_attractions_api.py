"""HTTP tests for attraction, admin and suggestion endpoints."""
import pytest

from tests.conftest import LONG_TEXT, create_category, make_attraction


@pytest.fixture
async def catalog(db_repos, admin_user):
    museums = await create_category(db_repos.categories, "Museums")
    parks = await create_category(db_repos.categories, "Parks", color="#10B981")
    station = db_repos.add_station("Nevsky Prospekt")
    hermitage = await db_repos.attractions.create(make_attraction(
        "State Hermitage", museums.id, admin_user.id,
        metro_station_id=station.id, district="Central", wheelchair_accessible=True,
    ))
    garden = await db_repos.attractions.create(make_attraction(
        "Summer Garden", parks.id, admin_user.id, district="Central",
    ))
    draft = await db_repos.attractions.create(make_attraction(
        "Secret Bunker", museums.id, admin_user.id, is_published=False,
    ))
    db_repos.add_image(hermitage.id, "side.jpg")
    db_repos.add_image(hermitage.id, "front.jpg", is_primary=True)
    return {
        "museums": museums,
        "parks": parks,
        "station": station,
        "hermitage": hermitage,
        "garden": garden,
        "draft": draft,
    }


def new_attraction_body(category_id: int, **overrides) -> dict:
    body = {
        "name": "Kazan Cathedral",
        "shortDescription": "Cathedral on Nevsky prospekt",
        "fullDescription": LONG_TEXT,
        "address": "Kazanskaya square, 2",
        "categoryId": category_id,
        "hasAudioGuide": True,
    }
    body.update(overrides)
    return body


# ==============================================================================
# PUBLIC LISTING
# ==============================================================================

def test_list_attractions_envelope(client, catalog):
    response = client.get("/api/attractions")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [a["name"] for a in body["attractions"]] == ["State Hermitage", "Summer Garden"]
    assert body["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalItems": 2,
        "hasNextPage": False,
        "hasPrevPage": False,
        "itemsPerPage": 12,
    }


def test_listing_includes_relations_and_primary_image(client, catalog):
    body = client.get("/api/attractions", params={"search": "hermitage"}).json()
    attraction = body["attractions"][0]
    assert attraction["category"]["name"] == "Museums"
    assert attraction["metroStation"]["name"] == "Nevsky Prospekt"
    assert attraction["wheelchairAccessible"] is True
    assert [image["filename"] for image in attraction["images"]] == ["front.jpg"]


def test_filters_from_query_string(client, catalog):
    parks_id = catalog["parks"].id
    body = client.get("/api/attractions", params={"category": str(parks_id), "sort": "newest"}).json()
    assert [a["name"] for a in body["attractions"]] == ["Summer Garden"]

    body = client.get("/api/attractions", params={"accessibility": "wheelchair"}).json()
    assert [a["name"] for a in body["attractions"]] == ["State Hermitage"]


def test_blank_parameters_are_ignored(client, catalog):
    response = client.get("/api/attractions?search=&category=&page=&sort=")
    assert response.status_code == 200
    assert response.json()["pagination"]["totalItems"] == 2


def test_pagination_beyond_last_page(client, catalog):
    body = client.get("/api/attractions", params={"page": "3", "limit": "1"}).json()
    assert body["attractions"] == []
    assert body["pagination"]["totalPages"] == 2
    assert body["pagination"]["hasPrevPage"] is True
    assert body["message"] == "Found 2 attractions"


def test_empty_result_message(client, catalog):
    body = client.get("/api/attractions", params={"search": "nothing like this"}).json()
    assert body["message"] == "No attractions found"
    assert body["pagination"]["totalPages"] == 0


def test_invalid_parameters_are_reported_together(client, catalog):
    response = client.get("/api/attractions", params={"page": "0", "limit": "500", "sort": "price"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert {error["field"] for error in body["errors"]} == {"page", "limit", "sort"}


def test_detail_returns_all_images_primary_first(client, catalog):
    response = client.get(f"/api/attractions/{catalog['hermitage'].id}")
    assert response.status_code == 200
    images = response.json()["attraction"]["images"]
    assert [image["filename"] for image in images] == ["front.jpg", "side.jpg"]


def test_detail_of_draft_is_forbidden(client, catalog):
    assert client.get(f"/api/attractions/{catalog['draft'].id}").status_code == 403


def test_detail_missing_is_404(client, catalog):
    assert client.get("/api/attractions/9999").status_code == 404


def test_suggestions(client, catalog):
    body = client.get("/api/attractions/suggestions", params={"query": "mu"}).json()
    assert body["suggestions"] == [
        {"type": "category", "id": catalog["museums"].id, "name": "Museums", "slug": "museums", "category": None},
    ]

    body = client.get("/api/attractions/suggestions", params={"query": "ga"}).json()
    assert [s["name"] for s in body["suggestions"]] == ["Summer Garden"]
    assert body["suggestions"][0]["category"] == "Parks"


def test_suggestions_need_two_characters(client, catalog):
    body = client.get("/api/attractions/suggestions", params={"query": "s"}).json()
    assert body["suggestions"] == []


# ==============================================================================
# ADMIN
# ==============================================================================

def test_create_requires_admin(client, catalog, user_headers):
    body = new_attraction_body(catalog["museums"].id)
    assert client.post("/api/attractions", json=body).status_code == 401
    assert client.post("/api/attractions", json=body, headers=user_headers).status_code == 403


def test_create_attraction(client, catalog, admin_headers, admin_user):
    response = client.post(
        "/api/attractions",
        json=new_attraction_body(catalog["museums"].id, metroStationId=catalog["station"].id),
        headers=admin_headers,
    )
    assert response.status_code == 201
    attraction = response.json()["attraction"]
    assert attraction["slug"].startswith("kazan-cathedral-")
    assert attraction["createdBy"] == admin_user.id
    assert attraction["hasAudioGuide"] is True
    assert attraction["metroStation"]["name"] == "Nevsky Prospekt"

    listing = client.get("/api/attractions", params={"accessibility": "audio"}).json()
    assert [a["name"] for a in listing["attractions"]] == ["Kazan Cathedral"]


def test_create_with_unknown_category_is_400(client, catalog, admin_headers):
    response = client.post("/api/attractions", json=new_attraction_body(9999), headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "categoryId"


def test_create_with_short_description_is_400(client, catalog, admin_headers):
    body = new_attraction_body(catalog["museums"].id, fullDescription="too short")
    response = client.post("/api/attractions", json=body, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "fullDescription"


def test_update_attraction_renames_and_keeps_other_fields(client, catalog, admin_headers):
    hermitage = catalog["hermitage"]
    response = client.put(
        f"/api/attractions/{hermitage.id}",
        json={"name": "Winter Palace", "isPublished": False},
        headers=admin_headers,
    )
    assert response.status_code == 200
    attraction = response.json()["attraction"]
    assert attraction["name"] == "Winter Palace"
    assert attraction["slug"].startswith("winter-palace-")
    assert attraction["isPublished"] is False
    assert attraction["district"] == "Central"
    assert attraction["wheelchairAccessible"] is True


def test_update_cannot_clear_required_field(client, catalog, admin_headers):
    response = client.put(
        f"/api/attractions/{catalog['garden'].id}",
        json={"address": None},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "address"


def test_delete_attraction(client, catalog, admin_headers):
    garden_id = catalog["garden"].id
    assert client.delete(f"/api/attractions/{garden_id}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/attractions/{garden_id}").status_code == 404
    assert client.delete(f"/api/attractions/{garden_id}", headers=admin_headers).status_code == 404


def test_admin_listing_includes_drafts(client, catalog, admin_headers, user_headers):
    assert client.get("/api/admin/attractions", headers=user_headers).status_code == 403
    body = client.get("/api/admin/attractions", headers=admin_headers).json()
    assert [a["name"] for a in body["attractions"]] == ["Secret Bunker", "State Hermitage", "Summer Garden"]


def test_statistics(client, catalog, admin_headers):
    response = client.get("/api/admin/statistics", headers=admin_headers)
    assert response.status_code == 200
    stats = response.json()["statistics"]
    assert stats["totals"] == {"attractions": 3, "published": 2, "drafts": 1, "categories": 2}
    assert [(c["name"], c["count"]) for c in stats["attractionsByCategory"]] == [("Museums", 1), ("Parks", 1)]
    assert len(stats["recentAttractions"]) == 3
