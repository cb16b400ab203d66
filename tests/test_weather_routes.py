"""
Tests for GET /api/weather.
"""

import httpx

from tests.helpers import weather_payload


class TestWeatherRoute:
    """Tests for GET /api/weather endpoint."""

    def test_returns_weather_and_theme(self, client, weather_handler):
        weather_handler.respond = lambda request: httpx.Response(
            200, json=weather_payload(code=61, temperature=12.5)
        )
        response = client.get("/api/weather?lat=37.5665&lon=126.978")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["weather"] == {"code": 61, "temp": 13, "description": body["theme"]["label"]}
        assert body["theme"]["color"] == "#4A90E2"
        assert body["theme"]["name"] == "rain"
        assert body["palette"] == {
            "primary": "#4A90E2",
            "light": "#4A90E220",
            "hover": "#3076c8",
        }
        assert "error" not in body

    def test_description_is_specific_to_the_code(self, client, weather_handler):
        weather_handler.respond = lambda request: httpx.Response(
            200, json=weather_payload(code=1, temperature=8.0)
        )
        body = client.get("/api/weather").json()
        assert body["theme"]["name"] == "clouds"
        assert body["theme"]["label"] == "흐림"
        assert body["weather"]["description"] == "대체로 맑음"

    def test_uses_default_location_without_coordinates(self, client, weather_calls):
        response = client.get("/api/weather")
        assert response.status_code == 200
        params = weather_calls[0].url.params
        assert params["latitude"] == "37.5665"
        assert params["longitude"] == "126.978"

    def test_passes_coordinates_through(self, client, weather_calls):
        client.get("/api/weather?lat=35.1796&lon=129.0756")
        params = weather_calls[0].url.params
        assert params["latitude"] == "35.1796"
        assert params["longitude"] == "129.0756"

    def test_upstream_failure_returns_200_with_default_theme(self, client, weather_handler):
        weather_handler.respond = lambda request: httpx.Response(500, text="boom")
        response = client.get("/api/weather")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["theme"]["name"] == "default"
        assert body["theme"]["color"] == "#00C6BD"
        assert body["palette"]["hover"] == "#00aca3"
        assert body["error"]
        assert "weather" not in body

    def test_timeout_returns_default_theme(self, client, weather_handler):
        def timeout(request):
            raise httpx.ReadTimeout("timed out", request=request)

        weather_handler.respond = timeout
        body = client.get("/api/weather").json()
        assert body["success"] is False
        assert body["theme"]["name"] == "default"

    def test_malformed_payload_returns_default_theme(self, client, weather_handler):
        weather_handler.respond = lambda request: httpx.Response(200, json={"hourly": {}})
        body = client.get("/api/weather").json()
        assert body["success"] is False
        assert body["theme"]["name"] == "default"

    def test_invalid_coordinates_return_default_theme(self, client, weather_calls):
        response = client.get("/api/weather?lat=north&lon=126.9")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["theme"]["name"] == "default"
        assert weather_calls == []
