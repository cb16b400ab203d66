"""
Shared helpers: in-memory database engines and fake weather responses.
"""

import httpx
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from app.weather.client import OpenMeteoClient

WEATHER_URL = "https://weather.test/v1/forecast"


def make_engine():
    """In-memory SQLite shared by every session (and thread) of a test."""
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def make_file_engine(path):
    """File-backed SQLite for tests where several threads write at once.

    Transactions start with BEGIN IMMEDIATE so concurrent writers wait on the
    busy timeout instead of failing on a lock upgrade.
    """
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def weather_payload(code=0, temperature=21.4):
    return {
        "latitude": 37.56,
        "longitude": 126.98,
        "current_weather": {
            "temperature": temperature,
            "windspeed": 5.1,
            "weathercode": code,
            "time": "2026-02-03T10:00",
        },
    }


def make_weather_client(handler) -> OpenMeteoClient:
    """OpenMeteoClient whose HTTP traffic is answered by ``handler``."""
    return OpenMeteoClient(
        base_url=WEATHER_URL,
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )
