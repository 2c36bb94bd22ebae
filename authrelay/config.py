import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_JWT_SECRET = "default_secret_key"  # insecure, dev only


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return int(raw)


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return float(raw)


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    jwt_secret: str = DEFAULT_JWT_SECRET
    users_path: Path = Path("users.json")
    hash_rounds: int = 29000
    groq_api_key: str = ""
    groq_model: str = "llama-3.1-8b-instant"
    groq_timeout: float = 60.0
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings once at startup; `.env` values fill unset variables."""
        load_dotenv()
        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_get_int("PORT", 8000),
            jwt_secret=os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET,
            users_path=Path(os.getenv("USERS_FILE", "users.json")).resolve(),
            hash_rounds=_get_int("PASSWORD_HASH_ROUNDS", 29000),
            groq_api_key=os.getenv("GROQ_API_KEY", ""),
            groq_model=os.getenv("GROQ_MODEL", "llama-3.1-8b-instant"),
            groq_timeout=_get_float("GROQ_TIMEOUT", 60.0),
            cors_origins=origins or ["*"],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
