"""Tests for all API endpoints."""
import pytest

from string_analyzer.analyzer import compute_hash


class TestRootAndHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "message" in data
        assert "POST /strings" in data["endpoints"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"]
        assert "T" in data["timestamp"]


class TestCreateStringEndpoint:
    """Tests for POST /strings endpoint."""

    def test_create_string_success(self, client):
        response = client.post("/strings", json={"value": "Hello World"})
        assert response.status_code == 201
        data = response.json()
        assert data["value"] == "Hello World"
        assert data["id"] == compute_hash("Hello World")
        assert data["properties"] == {
            "length": 11,
            "is_palindrome": False,
            "unique_characters": 8,
            "word_count": 2,
            "sha256_hash": compute_hash("Hello World"),
            "character_frequency_map": {
                "H": 1, "e": 1, "l": 3, "o": 2, " ": 1, "W": 1, "r": 1, "d": 1,
            },
        }
        assert "created_at" in data

    def test_create_exact_duplicate_conflict(self, client):
        """Exact duplicate returns 409; a case variant is a different string."""
        client.post("/strings", json={"value": "Test String"})
        response_dup = client.post("/strings", json={"value": "Test String"})
        assert response_dup.status_code == 409
        assert "error" in response_dup.json()
        response_case = client.post("/strings", json={"value": "test string"})
        assert response_case.status_code == 201

    def test_create_missing_value(self, client):
        response = client.post("/strings", json={})
        assert response.status_code == 400

    def test_create_wrong_type(self, client):
        response = client.post("/strings", json={"value": 123})
        assert response.status_code == 422

    def test_create_invalid_json_body(self, client):
        response = client.post(
            "/strings",
            content=b'{"value": "oops"',  # truncated JSON
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400


class TestGetStringEndpoint:
    def test_get_by_value(self, client):
        client.post("/strings", json={"value": "test string"})
        response = client.get("/strings/test string")
        assert response.status_code == 200
        assert response.json()["value"] == "test string"

    def test_get_by_id(self, client):
        created = client.post("/strings", json={"value": "test string"}).json()
        response = client.get(f"/strings/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_get_string_not_found(self, client):
        response = client.get("/strings/nonexistent_value")
        assert response.status_code == 404
        assert "not found" in response.json()["error"].lower()

    def test_get_string_preserves_created_at(self, client):
        created_at_1 = client.post("/strings", json={"value": "test"}).json()["created_at"]
        created_at_2 = client.get("/strings/test").json()["created_at"]
        assert created_at_1 == created_at_2


class TestGetAllStringsEndpoint:
    """Tests for GET /strings endpoint with filtering."""

    @pytest.fixture(autouse=True)
    def seed(self, client):
        for value in ["hello", "racecar", "hello world", "a"]:
            client.post("/strings", json={"value": value})

    def test_get_all_strings(self, client):
        data = client.get("/strings").json()
        assert data["count"] == 4
        assert len(data["data"]) == 4
        assert data["filters_applied"] == {}
        assert "interpreted_query" not in data

    def test_filter_by_palindrome(self, client):
        response = client.get("/strings?is_palindrome=true")
        assert response.status_code == 200
        assert response.json()["count"] == 2  # "racecar" and "a"

    def test_filter_by_min_length(self, client):
        assert client.get("/strings?min_length=5").json()["count"] == 3

    def test_filter_by_max_length(self, client):
        assert client.get("/strings?max_length=5").json()["count"] == 2

    def test_filter_by_word_count(self, client):
        assert client.get("/strings?word_count=1").json()["count"] == 3

    def test_filter_by_contains_character(self, client):
        assert client.get("/strings?contains_character=a").json()["count"] == 2
        assert client.get("/strings?contains_character=A").json()["count"] == 0

    def test_filter_combined(self, client):
        data = client.get("/strings?is_palindrome=true&min_length=1&max_length=10").json()
        assert data["count"] == 2
        assert data["filters_applied"] == {"is_palindrome": True, "min_length": 1, "max_length": 10}

    def test_min_greater_than_max_is_empty(self, client):
        response = client.get("/strings?min_length=10&max_length=5")
        assert response.status_code == 200
        assert response.json()["count"] == 0

    @pytest.mark.parametrize(
        "query",
        [
            "min_length=-1",
            "max_length=-1",
            "word_count=-1",
            "word_count=abc",
            "is_palindrome=maybe",
            "contains_character=abc",
        ],
    )
    def test_invalid_filters(self, client, query):
        response = client.get(f"/strings?{query}")
        assert response.status_code == 400
        assert "Invalid value" in response.json()["error"]


class TestFilterByNaturalLanguageEndpoint:
    @pytest.fixture(autouse=True)
    def seed(self, client):
        for value in ["a", "racecar", "hello world", "level"]:
            client.post("/strings", json={"value": value})

    def test_single_word_palindromes(self, client):
        response = client.get("/strings/filter-by-natural-language", params={"query": "single word palindromes"})
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert data["interpreted_query"] == {
            "original": "single word palindromes",
            "parsed_filters": {"is_palindrome": True, "word_count": 1},
        }
        assert "filters_applied" not in data

    def test_strings_longer_than(self, client):
        response = client.get(
            "/strings/filter-by-natural-language", params={"query": "strings longer than 10 characters"}
        )
        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_strings_containing_character(self, client):
        response = client.get(
            "/strings/filter-by-natural-language", params={"query": "strings containing the letter a"}
        )
        assert response.json()["count"] == 2

    def test_contain_the_first_vowel(self, client):
        response = client.get(
            "/strings/filter-by-natural-language", params={"query": "strings that contain the first vowel"}
        )
        assert response.json()["count"] == 2

    def test_missing_query_param_results_in_400(self, client):
        assert client.get("/strings/filter-by-natural-language").status_code == 400
        assert client.get("/strings/filter-by-natural-language?query=").status_code == 400

    def test_unparseable_query(self, client):
        response = client.get("/strings/filter-by-natural-language", params={"query": "tell me a joke"})
        assert response.status_code == 400

    def test_unsupported_word_count(self, client):
        response = client.get("/strings/filter-by-natural-language", params={"query": "eleven word strings"})
        assert response.status_code == 400
        assert "eleven" in response.json()["error"]

    def test_conflicting_filters(self, client):
        response = client.get(
            "/strings/filter-by-natural-language",
            params={"query": "strings longer than 10 and shorter than 5"},
        )
        assert response.status_code == 422


class TestDeleteStringEndpoint:
    def test_delete_string_success(self, client):
        client.post("/strings", json={"value": "to delete"})
        assert client.get("/strings/to delete").status_code == 200

        delete_response = client.delete("/strings/to delete")
        assert delete_response.status_code == 204
        assert delete_response.text == ""

        assert client.get("/strings/to delete").status_code == 404

    def test_delete_by_id(self, client):
        created = client.post("/strings", json={"value": "by id"}).json()
        assert client.delete(f"/strings/{created['id']}").status_code == 204
        assert client.get(f"/strings/{created['id']}").status_code == 404
        assert client.get("/strings/by id").status_code == 404

    def test_delete_twice(self, client):
        client.post("/strings", json={"value": "once"})
        assert client.delete("/strings/once").status_code == 204
        assert client.delete("/strings/once").status_code == 404

    def test_delete_string_not_in_get_all(self, client):
        client.post("/strings", json={"value": "string1"})
        client.post("/strings", json={"value": "string2"})
        assert client.get("/strings").json()["count"] == 2
        client.delete("/strings/string2")
        assert client.get("/strings").json()["count"] == 1


def test_each_app_has_its_own_store(client):
    from fastapi.testclient import TestClient

    from string_analyzer.main import create_app

    client.post("/strings", json={"value": "isolated"})
    with TestClient(create_app()) as other:
        assert other.get("/strings").json()["count"] == 0
