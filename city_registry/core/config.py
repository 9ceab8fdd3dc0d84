from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from typing import List, Union
from functools import lru_cache

# Origins always allowed in dev so the Swagger UI works from localhost or 127.0.0.1
DEV_CORS_ORIGINS = [
    "http://localhost:3000", "http://localhost:5173", "http://localhost:8000", "http://localhost:8080",
    "http://127.0.0.1:3000", "http://127.0.0.1:5173", "http://127.0.0.1:8000", "http://127.0.0.1:8080",
]


class Settings(BaseSettings):
    app_name: str = "City CRUD API"
    app_version: str = "1.0.0"
    app_description: str = "A simple FastAPI CRUD API for managing cities with in-memory storage"
    app_env: str = "dev"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Documentation (Swagger UI + OpenAPI 3.0 document)
    docs_url: str = "/api-docs"
    openapi_version: str = "3.0.3"

    # Store
    seed_sample_cities: bool = False
    # The documented schema marks `name` as required; enforcing it is opt-in
    validate_payloads: bool = False

    cors_origins: Union[List[str], str] = [
        "http://localhost:3000", "http://127.0.0.1:3000",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: Union[List[str], str]) -> List[str]:
        """Accept CORS_ORIGINS as `http://a, http://b` in the environment."""
        if isinstance(v, str):
            v = [origin.strip() for origin in v.split(",")]
        return [origin for origin in v if origin]

    @field_validator("docs_url")
    @classmethod
    def normalize_docs_url(cls, v: str) -> str:
        """Docs path always starts with a slash and never ends with one."""
        return "/" + v.strip("/")

    @model_validator(mode="after")
    def allow_local_docs_in_dev(self) -> "Settings":
        """Let a local Swagger UI call the API while developing."""
        if self.is_dev:
            extra = [o for o in DEV_CORS_ORIGINS if o not in self.cors_origins]
            object.__setattr__(self, "cors_origins", [*self.cors_origins, *extra])
        return self

    @property
    def openapi_url(self) -> str:
        """Path of the machine-readable API description."""
        return f"{self.docs_url}/openapi.json"

    @property
    def public_url(self) -> str:
        return f"http://localhost:{self.port}"

    @property
    def is_dev(self) -> bool:
        """Whether the app runs in the development environment."""
        return self.app_env.lower() == "dev"

    @property
    def debug(self) -> bool:
        return self.is_dev

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


settings = get_settings()
