import os
from typing import List


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    def __init__(self):
        self.GITHUB_TOKEN: str = os.getenv("GITHUB_TOKEN", "").strip()
        self.GITHUB_API: str = os.getenv("GITHUB_API", "https://api.github.com").rstrip("/")
        self.GITHUB_GRAPHQL: str = os.getenv("GITHUB_GRAPHQL", "https://api.github.com/graphql")
        self.CORS_ORIGINS: List[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",")]
        self.REQUEST_TIMEOUT: int = _int_env("REQUEST_TIMEOUT", 20)
        self.MAX_WORKERS: int = max(1, _int_env("MAX_WORKERS", 8))
        self.USERS_PER_PAGE: int = max(1, _int_env("USERS_PER_PAGE", 10))
        self.REPOS_PER_PAGE: int = max(1, _int_env("REPOS_PER_PAGE", 12))
        self.TOP_LANGUAGES: int = max(1, _int_env("TOP_LANGUAGES", 5))
        # páginas de 100 logins por lista (followers / following)
        self.NETWORK_MAX_PAGES: int = max(1, _int_env("NETWORK_MAX_PAGES", 50))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()


def get_settings() -> Settings:
    return settings
