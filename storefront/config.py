import os
from dataclasses import dataclass, field
from functools import lru_cache


def _truthy(name: str, default: str = "0") -> bool:
    v = os.getenv(name, default)
    return v not in ("", "0", "false", "False", "no", "No")


def _csv(name: str, default: str) -> list[str]:
    return [part.strip() for part in os.getenv(name, default).split(",") if part.strip()]


@dataclass
class Settings:
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/storefront_db"
    storage_backend: str = "sql"  # sql | memory
    seed_on_startup: bool = False
    sql_echo: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # 50MB so inline base64 screenshots fit
    max_body_bytes: int = 50 * 1024 * 1024

    admin_auth_required: bool = False
    strict_order_transitions: bool = False

    jwt_secret: str = "supersecretkey"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    admin_username: str = "admin"
    admin_password: str = "admin123"

    youtube_category_id: int = 2
    twitter_category_id: int = 5
    giftcard_category_id: int = 7

    def insecure_admin_defaults(self) -> list[str]:
        """Env vars still at their shipped values while admin auth is on."""
        if not self.admin_auth_required:
            return []
        defaults = Settings()
        insecure = []
        if self.jwt_secret == defaults.jwt_secret:
            insecure.append("JWT_SECRET")
        if self.admin_password == defaults.admin_password:
            insecure.append("ADMIN_PASSWORD")
        return insecure

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            storage_backend=os.getenv("STORAGE_BACKEND", cls.storage_backend).lower(),
            seed_on_startup=_truthy("SEED_ON_STARTUP"),
            sql_echo=_truthy("SQL_ECHO"),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            cors_origins=_csv("CORS_ORIGINS", "*"),
            max_body_bytes=int(os.getenv("MAX_BODY_BYTES", str(cls.max_body_bytes))),
            admin_auth_required=_truthy("ADMIN_AUTH_REQUIRED"),
            strict_order_transitions=_truthy("STRICT_ORDER_TRANSITIONS"),
            jwt_secret=os.getenv("JWT_SECRET", cls.jwt_secret),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", cls.jwt_algorithm),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
            admin_username=os.getenv("ADMIN_USERNAME", cls.admin_username),
            admin_password=os.getenv("ADMIN_PASSWORD", cls.admin_password),
            youtube_category_id=int(os.getenv("YOUTUBE_CATEGORY_ID", "2")),
            twitter_category_id=int(os.getenv("TWITTER_CATEGORY_ID", "5")),
            giftcard_category_id=int(os.getenv("GIFTCARD_CATEGORY_ID", "7")),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
