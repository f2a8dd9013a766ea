"""Centralized configuration — all env vars in one place."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5500"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.port: int = int(os.getenv("PORT", "3000"))
        self.public_dir: Path = Path(os.getenv("PUBLIC_DIR", str(DEFAULT_PUBLIC_DIR)))

        # football-data.org
        self.football_api_token: str | None = os.getenv("FOOTBALL_API_TOKEN")
        self.football_api_url: str = os.getenv("FOOTBALL_API_URL", "https://api.football-data.org/v4")

        # 10 requests / 15 minutes / client IP on /api/
        self.rate_limit_max: int = int(os.getenv("RATE_LIMIT_MAX", "10"))
        self.rate_limit_window_seconds: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))

        self.cache_sweep_seconds: int = int(os.getenv("CACHE_SWEEP_SECONDS", "120"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Return list of missing required env vars for upstream access."""
        required = ["FOOTBALL_API_TOKEN"]
        return [var for var in required if not getattr(self, var.lower())]


settings = Settings()
