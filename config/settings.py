import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///automations.db"
    log_level: str = "INFO"
    org_id: str = "local-org"
    user_id: str = "local-user"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            org_id=os.getenv("AUTOMATION_ORG_ID", cls.org_id),
            user_id=os.getenv("AUTOMATION_USER_ID", cls.user_id),
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
