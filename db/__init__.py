from .converters import db_to_pydantic_automation, pydantic_to_db_automation
from .models import AutomationModel, Base
from .repository import (
    AutomationAccessError,
    AutomationNotFoundError,
    AutomationRepository,
    InMemoryAutomationRepository,
    SqlAlchemyAutomationRepository,
)
from .session import create_session_factory

__all__ = [
    "AutomationAccessError",
    "AutomationNotFoundError",
    "AutomationRepository",
    "InMemoryAutomationRepository",
    "SqlAlchemyAutomationRepository",
    "AutomationModel",
    "Base",
    "create_session_factory",
    "pydantic_to_db_automation",
    "db_to_pydantic_automation",
]
