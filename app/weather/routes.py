from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.weather.client import OpenMeteoClient
from app.weather.schemas import WeatherThemeResult
from app.weather.service import resolve_weather_theme

router = APIRouter()


def get_weather_client() -> OpenMeteoClient:
    return OpenMeteoClient()


@router.get("", response_model=WeatherThemeResult, response_model_exclude_none=True)
async def get_weather(
    lat: Optional[str] = Query(None),
    lon: Optional[str] = Query(None),
    client: OpenMeteoClient = Depends(get_weather_client)
):
    """Clima actual y tema de colores.

    Si la consulta falla responde igualmente 200 con ``success: false`` y el
    tema por defecto, para que la vista siempre pueda renderizarse.
    """
    return await resolve_weather_theme(lat, lon, client)
