import logging
import math
from typing import Any, Optional

from app.core.config import settings
from app.core.errors import WeatherLookupError
from app.weather.client import OpenMeteoClient
from app.weather.schemas import WeatherInfo, WeatherThemeResult
from app.weather.theme import default_theme, describe_weather, theme_for_code, theme_palette

logger = logging.getLogger(__name__)


def _coordinate(value: Any, default: float, limit: float, name: str) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise WeatherLookupError(f"Invalid {name}: {value!r}")
    if not math.isfinite(number) or abs(number) > limit:
        raise WeatherLookupError(f"{name} out of range: {value!r}")
    return number


def parse_coordinates(lat: Any = None, lon: Any = None) -> tuple[float, float]:
    """Coordenadas de la query; si faltan se usa la ubicación por defecto (Seúl)"""
    return (
        _coordinate(lat, settings.DEFAULT_LATITUDE, 90, "latitude"),
        _coordinate(lon, settings.DEFAULT_LONGITUDE, 180, "longitude"),
    )


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def fallback_result(error: str, locale: Optional[str] = None) -> WeatherThemeResult:
    theme = default_theme(locale)
    return WeatherThemeResult(
        success=False,
        theme=theme,
        palette=theme_palette(theme),
        error=error,
    )


async def resolve_weather_theme(
    lat: Any = None,
    lon: Any = None,
    client: Optional[OpenMeteoClient] = None,
    locale: Optional[str] = None,
) -> WeatherThemeResult:
    """Clima actual + tema. Nunca lanza: cualquier fallo devuelve el tema por defecto."""
    client = client or OpenMeteoClient()
    try:
        latitude, longitude = parse_coordinates(lat, lon)
        reading = await client.current_weather(latitude, longitude)
    except WeatherLookupError as e:
        logger.warning(f"Fallo al consultar el clima, se usa el tema por defecto: {e}")
        return fallback_result(str(e), locale)
    except Exception as e:
        logger.exception("Error inesperado al consultar el clima, se usa el tema por defecto")
        return fallback_result(str(e) or e.__class__.__name__, locale)

    theme = theme_for_code(reading.code, locale)
    return WeatherThemeResult(
        success=True,
        weather=WeatherInfo(
            code=reading.code,
            temp=round_half_up(reading.temperature),
            description=describe_weather(reading.code, locale),
        ),
        theme=theme,
        palette=theme_palette(theme),
    )
