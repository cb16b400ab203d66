"""
Tema de colores según el clima.

Convierte el ``weathercode`` de Open-Meteo (códigos WMO) en un tema
``{color, name, label}``. La función es total: cualquier valor que no sea un
código conocido, incluida la ausencia de valor, devuelve el tema por defecto.

Referencia de códigos: https://open-meteo.com/en/docs
"""
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from app.core.config import settings
from app.weather.schemas import Theme, ThemeName, ThemePalette

MINT = "#00C6BD"
GRAY = "#8E8E93"
BLUE = "#4A90E2"
SNOW_BLUE = "#B8C5D6"

COLORS: Dict[ThemeName, str] = {
    ThemeName.CLEAR: MINT,
    ThemeName.CLOUDS: GRAY,
    ThemeName.RAIN: BLUE,
    ThemeName.SNOW: SNOW_BLUE,
    ThemeName.THUNDERSTORM: BLUE,
    ThemeName.DEFAULT: MINT,
}

LABELS: Dict[str, Dict[ThemeName, str]] = {
    "ko": {
        ThemeName.CLEAR: "맑음",
        ThemeName.CLOUDS: "흐림",
        ThemeName.RAIN: "비",
        ThemeName.SNOW: "눈",
        ThemeName.THUNDERSTORM: "천둥번개",
        ThemeName.DEFAULT: "기본",
    },
    "en": {
        ThemeName.CLEAR: "Clear",
        ThemeName.CLOUDS: "Cloudy",
        ThemeName.RAIN: "Rain",
        ThemeName.SNOW: "Snow",
        ThemeName.THUNDERSTORM: "Thunderstorm",
        ThemeName.DEFAULT: "Default",
    },
}

# Descripción por código; los códigos sin entrada usan la etiqueta del tema
WEATHER_DESCRIPTIONS: Dict[str, Dict[int, str]] = {
    "ko": {
        0: "맑음", 1: "대체로 맑음", 2: "부분적으로 흐림", 3: "흐림",
        45: "안개", 48: "안개",
        51: "이슬비", 53: "이슬비", 55: "이슬비",
        61: "비", 63: "비", 65: "폭우",
        71: "눈", 73: "눈", 75: "폭설",
        80: "소나기", 81: "소나기", 82: "폭우",
        95: "천둥번개", 96: "천둥번개", 99: "천둥번개",
    },
    "en": {
        0: "Clear", 1: "Mainly clear", 2: "Partly cloudy", 3: "Overcast",
        45: "Fog", 48: "Fog",
        51: "Drizzle", 53: "Drizzle", 55: "Drizzle",
        61: "Rain", 63: "Rain", 65: "Heavy rain",
        71: "Snow", 73: "Snow", 75: "Heavy snow",
        80: "Showers", 81: "Showers", 82: "Heavy rain",
        95: "Thunderstorm", 96: "Thunderstorm", 99: "Thunderstorm",
    },
}

CLOUD_CODES = {1, 2, 3, 45, 48}
SNOW_SHOWER_CODES = {85, 86}

_HEX_COLOR = re.compile(r"^#?([0-9A-Fa-f]{6})$")


def make_theme(name: ThemeName, locale: Optional[str] = None) -> Theme:
    labels = LABELS.get(locale or settings.WEATHER_LOCALE, LABELS["ko"])
    return Theme(color=COLORS[name], name=name, label=labels[name])


def default_theme(locale: Optional[str] = None) -> Theme:
    return make_theme(ThemeName.DEFAULT, locale)


def _as_weather_code(code: Any) -> Optional[int]:
    # bool es subclase de int, pero no es un código de clima
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return code
    if isinstance(code, float) and code.is_integer():
        return int(code)
    return None


def classify(code: Any) -> ThemeName:
    code = _as_weather_code(code)
    if code is None:
        return ThemeName.DEFAULT
    if code == 0:
        return ThemeName.CLEAR
    if code in CLOUD_CODES:
        return ThemeName.CLOUDS
    # Llovizna, lluvia y chubascos
    if 51 <= code <= 67 or 80 <= code <= 82:
        return ThemeName.RAIN
    if 71 <= code <= 77 or code in SNOW_SHOWER_CODES:
        return ThemeName.SNOW
    if 95 <= code <= 99:
        return ThemeName.THUNDERSTORM
    return ThemeName.DEFAULT


def theme_for_code(code: Any, locale: Optional[str] = None) -> Theme:
    """Tema para un weathercode; nunca lanza excepción"""
    return make_theme(classify(code), locale)


def describe_weather(code: Any, locale: Optional[str] = None) -> str:
    descriptions = WEATHER_DESCRIPTIONS.get(locale or settings.WEATHER_LOCALE, WEATHER_DESCRIPTIONS["ko"])
    description = descriptions.get(_as_weather_code(code))
    return description or theme_for_code(code, locale).label


def darken(color: str, percent: float) -> str:
    """Oscurece un color hex restando round(2.55 * percent) a cada canal.

    >>> darken("#00C6BD", 10)
    '#00aca3'
    """
    match = _HEX_COLOR.match(color) if isinstance(color, str) else None
    if not match:
        raise ValueError(f"Invalid hex color: {color!r}")
    if isinstance(percent, bool) or not isinstance(percent, (int, float)) or not 0 <= percent <= 100:
        raise ValueError(f"Percent must be between 0 and 100, got {percent!r}")

    # Redondeo "half up" exacto (25.5 -> 26), sin errores de punto flotante
    amount = int((Decimal("2.55") * Decimal(str(percent))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    value = int(match.group(1), 16)
    r = max(0, (value >> 16) - amount)
    g = max(0, ((value >> 8) & 0xFF) - amount)
    b = max(0, (value & 0xFF) - amount)
    return f"#{r:02x}{g:02x}{b:02x}"


def theme_palette(theme: Theme) -> ThemePalette:
    return ThemePalette(
        primary=theme.color,
        light=f"{theme.color}20",  # 20 = canal alfa (~12%)
        hover=darken(theme.color, 10),
    )
