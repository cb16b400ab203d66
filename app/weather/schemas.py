from enum import Enum
from typing import Optional
from pydantic import BaseModel


class ThemeName(str, Enum):
    CLEAR = "clear"
    CLOUDS = "clouds"
    RAIN = "rain"
    SNOW = "snow"
    THUNDERSTORM = "thunderstorm"
    DEFAULT = "default"


class Theme(BaseModel):
    color: str
    name: ThemeName
    label: str

    class Config:
        frozen = True
        use_enum_values = True


class ThemePalette(BaseModel):
    """Variables CSS que aplica la vista (--primary-color, -light, -hover)"""
    primary: str
    light: str
    hover: str


class WeatherReading(BaseModel):
    code: int
    temperature: float


class WeatherInfo(BaseModel):
    code: int
    temp: int
    description: str


class WeatherThemeResult(BaseModel):
    success: bool
    weather: Optional[WeatherInfo] = None
    theme: Theme
    palette: ThemePalette
    error: Optional[str] = None
