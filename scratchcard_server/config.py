from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from scratchcard.config import GameSettings, load_from_environment


@dataclass(frozen=True)
class FlaskSettings:
    secret_key: str = "scratchcard-dev-secret"
    debug: bool = True


@dataclass(frozen=True)
class AppSettings:
    flask: FlaskSettings
    game: GameSettings
    database_url: str
    admin_api_key: Optional[str]


@lru_cache(maxsize=1)
def load_settings(dotenv_path: Optional[str] = None) -> AppSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    flask_settings = FlaskSettings(
        secret_key=os.getenv("FLASK_SECRET_KEY", "scratchcard-dev-secret"),
        debug=os.getenv("FLASK_DEBUG", "1") == "1",
    )

    database_url = os.getenv("DATABASE_URL", "sqlite:///:memory:")
    admin_api_key = os.getenv("ADMIN_API_KEY") or None

    return AppSettings(
        flask=flask_settings,
        game=load_from_environment(),
        database_url=database_url,
        admin_api_key=admin_api_key,
    )
