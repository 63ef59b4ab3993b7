"""HTTP surface tests with a scripted oracle injected into the app."""

import json

import pytest
from fastapi.testclient import TestClient

from conftest import StubOracle, alternative_dict, component_json
from component_chameleon.ai.client import OracleClient, RetryPolicy
from component_chameleon.main import create_app


@pytest.fixture
def api(sleep):
    def _api(oracle) -> TestClient:
        client = OracleClient(oracle, policy=RetryPolicy(sleep=sleep))
        return TestClient(create_app(oracle_client=client))

    return _api


class TestComponentRoutes:
    def test_health(self, api):
        response = api(StubOracle("{}")).get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_search(self, api):
        alts = json.dumps([alternative_dict("LM1117")])
        oracle = StubOracle({"component_lookup": [component_json()], "alternatives": [alts]})

        response = api(oracle).post("/api/components/search", json={"query": "LM317"})

        assert response.status_code == 200
        body = response.json()
        assert body["original"]["partNumber"] == "LM317T"
        assert body["alternatives"][0]["justification"] == "Pin-compatible adjustable regulator"
        assert body["comparison"]["headers"][1]["partNumber"] == "LM1117"
        assert "isDifferent" in body["comparison"]["rows"][0]["values"][1]

    def test_not_found_maps_to_404_with_user_message(self, api):
        oracle = StubOracle(component_json("Not Found"))

        response = api(oracle).post("/api/components/resolve", json={"query": "ZZZ"})

        assert response.status_code == 404
        assert response.json() == {
            "kind": "NOT_FOUND",
            "message": 'No component matching "ZZZ" could be found. '
            "Please check your search term and try again.",
        }

    def test_blank_query_rejected_without_oracle_call(self, api):
        oracle = StubOracle(component_json())

        response = api(oracle).post("/api/components/resolve", json={"query": "   "})

        assert response.status_code == 404
        assert oracle.calls() == 0

    def test_parsing_error_maps_to_502(self, api):
        response = api(StubOracle("no json here")).post(
            "/api/components/resolve", json={"query": "LM317"}
        )
        assert response.status_code == 502
        assert response.json()["kind"] == "PARSING_ERROR"

    def test_api_error_maps_to_503(self, api):
        response = api(StubOracle(ConnectionError("down"))).post(
            "/api/components/resolve", json={"query": "LM317"}
        )
        assert response.status_code == 503
        assert response.json()["kind"] == "API_ERROR"

    def test_alternatives_absorb_failure(self, api):
        original = json.loads(component_json())
        response = api(StubOracle("garbage")).post("/api/components/alternatives", json=original)
        assert response.status_code == 200
        assert response.json() == []

    def test_compare_without_oracle(self, api):
        oracle = StubOracle("{}")
        original = json.loads(component_json())
        alt = alternative_dict("LM1117")

        response = api(oracle).post(
            "/api/components/compare", json={"original": original, "alternatives": [alt]}
        )

        assert response.status_code == 200
        assert len(response.json()["headers"]) == 2
        assert oracle.calls() == 0


class TestBatchRoutes:
    def test_bulk_run(self, api):
        oracle = StubOracle({"component_lookup": [component_json()], "alternatives": ["[]"]})

        response = api(oracle).post("/api/bulk/run", json={"partNumbers": ["A", " ", "B"]})

        assert response.status_code == 200
        body = response.json()
        assert [i["state"] for i in body["items"]] == ["success", "success"]
        assert body["progress"] == {"current": 2, "total": 2}

    def test_bom_health_degrades(self, api):
        parts = [{"partNumber": f"PN{i}", "manufacturer": "TI"} for i in range(3)]

        response = api(StubOracle("nope")).post(
            "/api/bom/health", json={"parts": parts, "batchSize": 2}
        )

        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["partNumber"] for r in results] == ["PN0", "PN1", "PN2"]
        assert {r["lifecycleStatus"] for r in results} == {"Error"}

    def test_bom_health_requires_parts(self, api):
        response = api(StubOracle("[]")).post("/api/bom/health", json={"parts": []})
        assert response.status_code == 422
