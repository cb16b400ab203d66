import logging
import math
from typing import Optional

import httpx

from app.core.config import settings
from app.core.errors import WeatherLookupError
from app.weather.schemas import WeatherReading

logger = logging.getLogger(__name__)


class OpenMeteoClient:
    """Cliente mínimo de Open-Meteo (pronóstico por coordenadas, sin API key)"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        timezone: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.WEATHER_API_URL
        self.timeout = timeout if timeout is not None else settings.WEATHER_TIMEOUT_SECONDS
        self.timezone = timezone or settings.WEATHER_TIMEZONE
        # Permite inyectar un transporte (p. ej. httpx.MockTransport en tests)
        self.transport = transport

    async def current_weather(self, lat: float, lon: float) -> WeatherReading:
        """Clima actual; cualquier fallo se convierte en WeatherLookupError"""
        params = {
            "latitude": lat,
            "longitude": lon,
            "current_weather": "true",
            "timezone": self.timezone,
        }
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self.transport,
            ) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            raise WeatherLookupError(f"Weather API timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise WeatherLookupError(f"Weather API returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise WeatherLookupError(f"Weather API request failed: {e}") from e
        except ValueError as e:
            raise WeatherLookupError("Weather API returned invalid JSON") from e

        return self._parse(data)

    @staticmethod
    def _parse(data) -> WeatherReading:
        current = data.get("current_weather") if isinstance(data, dict) else None
        if not isinstance(current, dict):
            raise WeatherLookupError("Weather API response has no current_weather")

        code = current.get("weathercode")
        temperature = current.get("temperature")
        if isinstance(code, bool) or not isinstance(code, (int, float)) or not float(code).is_integer():
            raise WeatherLookupError(f"Invalid weathercode: {code!r}")
        if isinstance(temperature, bool) or not isinstance(temperature, (int, float)) or not math.isfinite(temperature):
            raise WeatherLookupError(f"Invalid temperature: {temperature!r}")

        return WeatherReading(code=int(code), temperature=float(temperature))
