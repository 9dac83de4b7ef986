"""
Tests for the product filter HTTP API.
"""

import asyncio

from search.errors import BackendError, BackendUnavailable


class TestQueryProducts:

    def test_returns_results(self, client, valid_payload, sample_results):
        response = client.post("/api/products", json=valid_payload)
        assert response.status_code == 200
        body = response.json()
        assert [r["id"] for r in body] == [r["id"] for r in sample_results]
        assert body[0]["metadata"]["price"] == 19.99

    def test_request_id_header(self, client, valid_payload):
        response = client.post("/api/products", json=valid_payload, headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    def test_unknown_color_rejected_before_query(self, client, valid_payload, mock_vector_client):
        valid_payload["color"] = ["orange"]
        response = client.post("/api/products", json=valid_payload)
        assert response.status_code == 422
        assert "orange" in response.json()["message"]
        mock_vector_client.query.assert_not_called()

    def test_invalid_range_rejected(self, client, valid_payload, mock_vector_client):
        valid_payload["price"] = [80, 20]
        response = client.post("/api/products", json=valid_payload)
        assert response.status_code == 422
        assert "message" in response.json()
        mock_vector_client.query.assert_not_called()

    def test_infinite_price_rejected(self, client, mock_vector_client):
        # httpx will not encode Infinity, so send the raw body
        response = client.post(
            "/api/products",
            content='{"color": ["blue"], "size": ["M"], "price": [0, Infinity], "sort": "none"}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        assert "finite" in response.json()["message"]
        mock_vector_client.query.assert_not_called()

    def test_nan_price_rejected(self, client, mock_vector_client):
        response = client.post(
            "/api/products",
            content='{"color": ["blue"], "size": ["M"], "price": [NaN, 100], "sort": "none"}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        mock_vector_client.query.assert_not_called()

    def test_missing_field_rejected(self, client, valid_payload):
        del valid_payload["sort"]
        response = client.post("/api/products", json=valid_payload)
        assert response.status_code == 422
        assert "message" in response.json()

    def test_backend_error_is_generic(self, client, valid_payload, mock_vector_client):
        mock_vector_client.query.side_effect = BackendError("upstream said: bad token xyz")
        response = client.post("/api/products", json=valid_payload)
        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
        assert "xyz" not in response.text

    def test_backend_unavailable_is_generic(self, client, valid_payload, mock_vector_client):
        mock_vector_client.query.side_effect = BackendUnavailable("connect timeout to 10.0.0.1")
        response = client.post("/api/products", json=valid_payload)
        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}

    def test_empty_selection_still_queries(self, client, mock_vector_client):
        response = client.post(
            "/api/products",
            json={"color": [], "size": [], "price": [0, 100], "sort": "none"},
        )
        assert response.status_code == 200
        assert mock_vector_client.query.call_args.kwargs["filter"] == (
            '(color = "") AND (size = "") AND (price >= 0 AND price <= 100)'
        )

    def test_route_is_sync(self):
        from api.routes.products import query_products
        assert not asyncio.iscoroutinefunction(query_products)

    def test_error_responses_documented(self, client):
        responses = client.get("/openapi.json").json()["paths"]["/api/products"]["post"]["responses"]
        assert {"200", "422", "500"} <= set(responses)


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_live(self, client):
        assert client.get("/live").json() == {"status": "alive"}

    def test_ready_reflects_configuration(self, client):
        from unittest.mock import patch
        from config.settings import get_settings_for_testing

        with patch("api.routes.health.get_settings", return_value=get_settings_for_testing()):
            assert client.get("/ready").json() == {"status": "ready"}

        unconfigured = get_settings_for_testing(upstash_vector_rest_url="", upstash_vector_rest_token="")
        with patch("api.routes.health.get_settings", return_value=unconfigured):
            assert client.get("/ready").json()["status"] == "not_ready"

    def test_detailed_reports_index_error(self, client):
        from unittest.mock import MagicMock, patch
        from config.settings import get_settings_for_testing

        failing = MagicMock()
        failing.info.side_effect = BackendUnavailable("down")
        with patch("api.routes.health.get_settings", return_value=get_settings_for_testing()), \
                patch("api.routes.health.get_vector_client", return_value=failing):
            body = client.get("/health/detailed").json()
        assert body["status"] == "degraded"
        assert body["checks"]["vector_index"]["status"] == "error"
