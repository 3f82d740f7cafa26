"""
API endpoint tests.

FastAPI's TestClient against an in-memory SQLite database; `get_db` and
`get_storage` are swapped out through `app.dependency_overrides`.
"""
import pytest

from reliefmap.models.help_request import HelpRequest


def _create(client, headers, **overrides):
    body = {"title": "Need drinking water", "category": "Water", "urgency": "High"}
    body.update(overrides)
    resp = client.post("/requests", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _jpeg(photo):
    return (photo.filename, photo.data, photo.content_type)


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"ok": True}


class TestCreateAndList:
    def test_requires_user(self, client):
        resp = client.post("/requests", json={"title": "x"})
        assert resp.status_code == 401

    def test_create_defaults(self, client, victim_headers):
        data = _create(client, victim_headers, category="Other", urgency="Low")
        assert data["status"] == "Open"
        assert data["id"]
        assert data["created_by"] == "victim-1"
        assert data["is_contact_shared"] is True
        assert data["gps_lat"] is None

    def test_create_with_coordinates(self, client, victim_headers):
        data = _create(client, victim_headers, gps_lat=33.749, gps_lng=-84.388)
        assert (data["gps_lat"], data["gps_lng"]) == (33.749, -84.388)

    def test_blank_title_rejected(self, client, victim_headers):
        resp = client.post("/requests", json={"title": "   "}, headers=victim_headers)
        assert resp.status_code == 422

    def test_unknown_category_rejected(self, client, victim_headers):
        resp = client.post("/requests", json={"title": "x", "category": "Pizza"}, headers=victim_headers)
        assert resp.status_code == 422

    def test_out_of_range_latitude_rejected(self, client, victim_headers):
        resp = client.post("/requests", json={"title": "x", "gps_lat": 91, "gps_lng": 0}, headers=victim_headers)
        assert resp.status_code == 422

    def test_list_filters(self, client, victim_headers):
        _create(client, victim_headers, category="Water", urgency="High")
        _create(client, victim_headers, category="Meals", urgency="Low")

        assert len(client.get("/requests").json()) == 2
        meals = client.get("/requests", params={"category": "Meals"}).json()
        assert [r["category"] for r in meals] == ["Meals"]
        high = client.get("/requests", params={"urgency": "High"}).json()
        assert [r["urgency"] for r in high] == ["High"]
        assert len(client.get("/requests", params={"limit": 1}).json()) == 1

    def test_get_one_and_missing(self, client, victim_headers):
        created = _create(client, victim_headers)
        assert client.get(f"/requests/{created['id']}").json()["title"] == "Need drinking water"
        assert client.get("/requests/nope").status_code == 404


class TestClaim:
    def test_claim_open_request(self, client, victim_headers, volunteer_headers):
        created = _create(client, victim_headers)
        resp = client.patch(f"/requests/{created['id']}/claim", headers=volunteer_headers)
        assert resp.status_code == 200
        assert resp.json()["status"] == "Claimed"
        assert resp.json()["claimed_by"] == "volunteer-1"

    def test_second_claim_conflicts(self, client, victim_headers, volunteer_headers):
        created = _create(client, victim_headers)
        client.patch(f"/requests/{created['id']}/claim", headers=volunteer_headers)
        resp = client.patch(f"/requests/{created['id']}/claim", headers={"X-User-Id": "volunteer-2"})
        assert resp.status_code == 409

    def test_claim_missing(self, client, volunteer_headers):
        assert client.patch("/requests/missing/claim", headers=volunteer_headers).status_code == 404

    def test_claim_on_behalf_of(self, client, victim_headers, volunteer_headers):
        created = _create(client, victim_headers)
        resp = client.patch(
            f"/requests/{created['id']}/claim",
            json={"claimed_by": "org-7"},
            headers=volunteer_headers,
        )
        assert resp.json()["claimed_by"] == "org-7"

    def test_fulfill_only_after_claim(self, client, victim_headers, volunteer_headers):
        created = _create(client, victim_headers)
        rid = created["id"]
        assert client.patch(f"/requests/{rid}/fulfill", headers=volunteer_headers).status_code == 409
        client.patch(f"/requests/{rid}/claim", headers=volunteer_headers)
        resp = client.patch(f"/requests/{rid}/fulfill", headers=volunteer_headers)
        assert resp.status_code == 200
        assert resp.json()["status"] == "Fulfilled"

    def test_status_filter(self, client, victim_headers, volunteer_headers):
        a = _create(client, victim_headers)
        _create(client, victim_headers)
        client.patch(f"/requests/{a['id']}/claim", headers=volunteer_headers)
        claimed = client.get("/requests", params={"status": "Claimed"}).json()
        assert [r["id"] for r in claimed] == [a["id"]]


class TestSubmit:
    def test_location_from_photo(self, client, victim_headers, atlanta_photo, storage):
        resp = client.post(
            "/requests/submit",
            data={"title": "Roof collapsed", "category": "Shelter", "urgency": "High"},
            files=[("photos", _jpeg(atlanta_photo))],
            headers=victim_headers,
        )
        assert resp.status_code == 201, resp.text
        data = resp.json()
        assert data["gps_lat"] == pytest.approx(33.7490, abs=1e-4)
        assert data["gps_lng"] == pytest.approx(-84.3880, abs=1e-4)
        assert data["photo_taken_time"] == "2024:09:27 10:15:00"
        assert data["exif_data"][0]["camera"] == "Pixel 8"

        [url] = data["photo_urls"]
        assert url.startswith("/data/photos/requests/victim-1/")
        assert url.endswith("-0-atlanta.jpg")
        stored = storage.root / url[len("/data/"):]
        assert stored.exists()

    def test_typed_coordinates_win(self, client, victim_headers, atlanta_photo):
        resp = client.post(
            "/requests/submit",
            data={"title": "Roof", "gps_lat": "34.0", "gps_lng": "-85.0"},
            files=[("photos", _jpeg(atlanta_photo))],
            headers=victim_headers,
        )
        assert (resp.json()["gps_lat"], resp.json()["gps_lng"]) == (34.0, -85.0)

    def test_second_photo_supplies_location(self, client, victim_headers, make_photo):
        plain = make_photo(name="plain.jpg")
        tagged = make_photo(name="tagged.jpg", lat=10.0, lng=20.0)
        resp = client.post(
            "/requests/submit",
            data={"title": "Flooded street"},
            files=[("photos", _jpeg(plain)), ("photos", _jpeg(tagged))],
            headers=victim_headers,
        )
        data = resp.json()
        assert data["gps_lat"] == pytest.approx(10.0, abs=1e-4)
        assert len(data["photo_urls"]) == 2
        assert data["photo_urls"][0].endswith("-0-plain.jpg")

    def test_no_photos_no_coordinates(self, client, victim_headers):
        resp = client.post(
            "/requests/submit",
            data={"title": "Need insulin", "category": "Medical", "description": "  ", "contact_name": ""},
            headers=victim_headers,
        )
        data = resp.json()
        assert resp.status_code == 201
        assert data["gps_lat"] is None
        assert data["photo_urls"] is None
        assert data["exif_data"] is None
        assert data["description"] is None

    def test_no_photos_typed_coordinates(self, client, victim_headers):
        resp = client.post(
            "/requests/submit",
            data={"title": "Need water", "gps_lat": "12.5", "gps_lng": "-7.25"},
            headers=victim_headers,
        )
        assert (resp.json()["gps_lat"], resp.json()["gps_lng"]) == (12.5, -7.25)

    def test_too_many_photos(self, client, victim_headers, make_photo):
        files = [("photos", _jpeg(make_photo(name=f"{i}.jpg"))) for i in range(6)]
        resp = client.post("/requests/submit", data={"title": "x"}, files=files, headers=victim_headers)
        assert resp.status_code == 422
        assert "Maximum 5 images allowed" in resp.json()["detail"]["errors"]

    def test_non_image_rejected(self, client, victim_headers, db_session):
        resp = client.post(
            "/requests/submit",
            data={"title": "x"},
            files=[("photos", ("notes.txt", b"hello", "text/plain"))],
            headers=victim_headers,
        )
        assert resp.status_code == 422
        assert resp.json()["detail"]["errors"] == ["File 1 (notes.txt) is not an image"]
        assert db_session.query(HelpRequest).count() == 0

    def test_unreadable_photo_still_submits(self, client, victim_headers):
        resp = client.post(
            "/requests/submit",
            data={"title": "x"},
            files=[("photos", ("broken.jpg", b"\xff\xd8broken", "image/jpeg"))],
            headers=victim_headers,
        )
        assert resp.status_code == 201
        assert resp.json()["gps_lat"] is None

    def test_requires_user(self, client):
        assert client.post("/requests/submit", data={"title": "x"}).status_code == 401


class TestOffersAndZones:
    def test_offer_roundtrip(self, client, volunteer_headers):
        resp = client.post(
            "/offers",
            json={"description": "Generator and fuel", "category": "Equipment", "gps_lat": 33.7, "gps_lng": -84.4},
            headers=volunteer_headers,
        )
        assert resp.status_code == 201
        assert client.get("/offers").json()[0]["description"] == "Generator and fuel"
        assert client.get(f"/offers/{resp.json()['id']}").status_code == 200

    def test_zone_with_polygon(self, client, volunteer_headers):
        poly = {"type": "Polygon", "coordinates": [[[-84.4, 33.7], [-84.3, 33.7], [-84.3, 33.8], [-84.4, 33.7]]]}
        resp = client.post("/zones", json={"type": "Starlink", "polygon": poly}, headers=volunteer_headers)
        assert resp.status_code == 201
        assert client.get("/zones", params={"type": "Starlink"}).json()[0]["polygon"] == poly

    def test_zone_polygon_must_be_polygon(self, client, volunteer_headers):
        resp = client.post("/zones", json={"type": "WiFi", "polygon": {"type": "Point", "coordinates": [0, 0]}}, headers=volunteer_headers)
        assert resp.status_code == 400


class TestMapFeatures:
    def test_feature_collection(self, client, victim_headers, volunteer_headers):
        _create(client, victim_headers, urgency="Medium", gps_lat=33.749, gps_lng=-84.388)
        _create(client, victim_headers, title="no location")
        client.post("/offers", json={"description": "Water", "gps_lat": 33.0, "gps_lng": -84.0}, headers=volunteer_headers)

        fc = client.get("/map/features").json()
        assert fc["type"] == "FeatureCollection"
        kinds = sorted(f["properties"]["kind"] for f in fc["features"])
        assert kinds == ["offer", "request"]
        req = next(f for f in fc["features"] if f["properties"]["kind"] == "request")
        assert req["properties"]["weight"] == 0.6
        assert req["geometry"]["coordinates"] == [-84.388, 33.749]

    def test_kind_and_status_filters(self, client, victim_headers, volunteer_headers):
        created = _create(client, victim_headers, gps_lat=1.0, gps_lng=2.0)
        client.post("/offers", json={"description": "Tarp", "gps_lat": 3.0, "gps_lng": 4.0}, headers=volunteer_headers)

        only_requests = client.get("/map/features", params={"kinds": "requests"}).json()
        assert [f["properties"]["id"] for f in only_requests["features"]] == [created["id"]]

        claimed = client.get("/map/features", params={"kinds": "requests", "status": "Claimed"}).json()
        assert claimed["features"] == []

    def test_unknown_kind(self, client):
        assert client.get("/map/features", params={"kinds": "volcanoes"}).status_code == 400
