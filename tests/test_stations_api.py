from urllib.parse import parse_qs, urlparse

import pytest


class TestListStations:
    def test_lists_stations_ordered_by_name(self, client, create_station):
        create_station(name="Paris Gare du Nord", country_code="FR")
        create_station(name="Amsterdam Centraal", country_code="NL")
        create_station(name="Berlin Hauptbahnhof", country_code="DE")

        response = client.get("/api/stations")

        assert response.status_code == 200
        body = response.json()
        assert [s["name"] for s in body["data"]] == [
            "Amsterdam Centraal", "Berlin Hauptbahnhof", "Paris Gare du Nord"
        ]
        assert set(body["data"][0]) == {"id", "name", "address", "country_code", "timezone"}
        assert response.headers["cache-control"] == "public, max-age=3600"

    def test_search_matches_name_or_address_case_insensitively(self, client, create_station):
        create_station(name="Berlin Hauptbahnhof", address="Invalidenstraße, Berlin")
        create_station(name="Spandau", address="Seegefelder Str., BERLIN")
        create_station(name="Paris Gare du Nord", address="Rue de Dunkerque, Paris", country_code="FR")

        response = client.get("/api/stations", params={"search": "berlin"})

        names = [s["name"] for s in response.json()["data"]]
        assert names == ["Berlin Hauptbahnhof", "Spandau"]

    @pytest.mark.parametrize("text", ["_", "%", "\\"])
    def test_search_wildcards_match_literally(self, client, create_station, text):
        create_station(name="Berlin Hauptbahnhof")
        create_station(name="Paris Gare du Nord", country_code="FR")

        response = client.get("/api/stations", params={"search": text})

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_search_finds_literal_percent_sign(self, client, create_station):
        create_station(name="100% Bahnhof")
        create_station(name="Berlin Hauptbahnhof")

        response = client.get("/api/stations", params={"search": "100%"})

        assert [s["name"] for s in response.json()["data"]] == ["100% Bahnhof"]

    def test_country_filter(self, client, create_station):
        create_station(name="Berlin Hauptbahnhof", country_code="DE")
        create_station(name="Paris Gare du Nord", country_code="FR")

        response = client.get("/api/stations", params={"country": "fr"})

        assert [s["name"] for s in response.json()["data"]] == ["Paris Gare du Nord"]

    def test_coordinates_are_accepted_without_changing_order(self, client, create_station):
        create_station(name="B")
        create_station(name="A")

        response = client.get("/api/stations", params={"coordinates": "52.52,13.37"})

        assert response.status_code == 200
        assert [s["name"] for s in response.json()["data"]] == ["A", "B"]

    def test_malformed_coordinates_are_rejected(self, client):
        response = client.get("/api/stations", params={"coordinates": "somewhere"})

        assert response.status_code == 400
        assert response.headers["content-type"] == "application/problem+json"

    def test_country_must_be_two_letters(self, client):
        response = client.get("/api/stations", params={"country": "DEU"})

        assert response.status_code == 400

    def test_pagination_links(self, client, create_station):
        for i in range(25):
            create_station(name=f"Station {i:02d}")

        first = client.get("/api/stations", params={"page": 1, "limit": 10}).json()
        last = client.get("/api/stations", params={"page": 3, "limit": 10}).json()

        assert len(first["data"]) == 10
        assert "next" in first["links"] and "prev" not in first["links"]
        assert parse_qs(urlparse(first["links"]["next"]).query)["page"] == ["2"]

        assert len(last["data"]) == 5
        assert "prev" in last["links"] and "next" not in last["links"]
        assert last["data"][0]["name"] == "Station 20"

    def test_pagination_links_keep_filters(self, client, create_station):
        for i in range(3):
            create_station(name=f"Berlin {i}", country_code="DE")
        create_station(name="Paris Gare du Nord", country_code="FR")

        body = client.get("/api/stations", params={"country": "DE", "search": "berlin", "limit": 2}).json()

        query = parse_qs(urlparse(body["links"]["next"]).query)
        assert query == {"page": ["2"], "limit": ["2"], "search": ["berlin"], "country": ["DE"]}

        following = client.get(body["links"]["next"]).json()
        assert [s["name"] for s in following["data"]] == ["Berlin 2"]
        assert "next" not in following["links"]

    def test_limit_above_maximum_is_rejected(self, client):
        response = client.get("/api/stations", params={"limit": 101})

        assert response.status_code == 400
        assert response.json()["status"] == 400

    def test_page_zero_is_rejected(self, client):
        assert client.get("/api/stations", params={"page": 0}).status_code == 400


class TestGetStation:
    def test_returns_station(self, client, origin):
        response = client.get(f"/api/stations/{origin.id}")

        assert response.status_code == 200
        assert response.json()["name"] == "Berlin Hauptbahnhof"

    def test_malformed_id(self, client):
        response = client.get("/api/stations/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid station ID format"

    def test_unknown_id(self, client):
        response = client.get("/api/stations/00000000-0000-4000-8000-000000000000")

        assert response.status_code == 404
