import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from models import Automation, AutomationRecord, AutomationUpdate
from registry import Registry, create_default_registries
from validations import validate_nodes, validate_trigger

from .converters import db_to_pydantic_automation, nodes_to_json, pydantic_to_db_automation, trigger_to_json
from .models import AutomationModel

logger = logging.getLogger(__name__)


class AutomationNotFoundError(LookupError):
    """Raised when a mutation targets an automation that does not exist."""


class AutomationAccessError(PermissionError):
    """Raised when an automation belongs to a different organization than the caller."""


def _sort_by_name(records: List[AutomationRecord]) -> List[AutomationRecord]:
    return sorted(records, key=lambda record: record.name.casefold())


class AutomationRepository(ABC):
    """
    Abstract persistence boundary. Implementations are responsible for
    durability, conflicts, and connectivity. This layer treats the DB as a
    black box, but every write passes through the structure validator first
    so malformed node graphs never reach storage.
    """

    def __init__(self, registries: Dict[str, Registry] | None = None) -> None:
        self.registries = registries if registries is not None else create_default_registries()

    def _check_automation(self, automation: Automation) -> None:
        validate_trigger(automation.trigger, self.registries)
        validate_nodes(automation.nodes, self.registries)

    def _collect_updates(self, updates: AutomationUpdate) -> Dict[str, Any]:
        changes = {
            name: getattr(updates, name)
            for name in updates.model_fields_set
            if getattr(updates, name) is not None
        }
        if not changes:
            raise ValueError("No valid updates provided")
        if "trigger" in changes:
            validate_trigger(changes["trigger"], self.registries)
        if "nodes" in changes:
            validate_nodes(changes["nodes"], self.registries)
        return changes

    @staticmethod
    def _check_org(record_id: str, record_org_id: str, org_id: str) -> None:
        if record_org_id != org_id:
            logger.warning("Automation %s requested from foreign org %s", record_id, org_id)
            raise AutomationAccessError("Automation does not belong to your organization")

    def get_or_raise(self, record_id: str, org_id: str) -> AutomationRecord:
        record = self.get(record_id, org_id)
        if record is None:
            raise AutomationNotFoundError("Automation not found")
        return record

    @abstractmethod
    def save(self, automation: Automation, org_id: str, created_by: str) -> str:
        """Persist the automation and return its generated identifier."""
        raise NotImplementedError

    @abstractmethod
    def get(self, record_id: str, org_id: str) -> AutomationRecord | None:
        """Fetch an automation by id, or None if missing."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self, org_id: str) -> List[AutomationRecord]:
        """All automations of the organization, sorted by name."""
        raise NotImplementedError

    @abstractmethod
    def list_active(self, org_id: str) -> List[AutomationRecord]:
        """Active automations of the organization, sorted by name."""
        raise NotImplementedError

    @abstractmethod
    def update(self, record_id: str, org_id: str, updates: AutomationUpdate) -> str:
        """Apply a partial update and return the automation id."""
        raise NotImplementedError

    @abstractmethod
    def toggle_active(self, record_id: str, org_id: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def delete(self, record_id: str, org_id: str) -> str:
        raise NotImplementedError


class InMemoryAutomationRepository(AutomationRepository):
    """
    Minimal in-memory implementation for local testing. Not intended for prod.
    """

    def __init__(self, registries: Dict[str, Registry] | None = None) -> None:
        super().__init__(registries)
        self._storage: Dict[str, AutomationRecord] = {}

    def save(self, automation: Automation, org_id: str, created_by: str) -> str:
        self._check_automation(automation)
        record_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        self._storage[record_id] = AutomationRecord(
            **automation.model_dump(),
            id=record_id,
            org_id=org_id,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        logger.info("Saved automation %s for org %s", record_id, org_id)
        return record_id

    def get(self, record_id: str, org_id: str) -> AutomationRecord | None:
        record = self._storage.get(record_id)
        if record is None:
            return None
        self._check_org(record_id, record.org_id, org_id)
        return record

    def list_all(self, org_id: str) -> List[AutomationRecord]:
        return _sort_by_name([record for record in self._storage.values() if record.org_id == org_id])

    def list_active(self, org_id: str) -> List[AutomationRecord]:
        return [record for record in self.list_all(org_id) if record.is_active]

    def update(self, record_id: str, org_id: str, updates: AutomationUpdate) -> str:
        changes = self._collect_updates(updates)
        record = self.get_or_raise(record_id, org_id)
        changes["updated_at"] = datetime.now(timezone.utc)
        self._storage[record_id] = record.model_copy(update=changes)
        logger.info("Updated automation %s: %s", record_id, ", ".join(sorted(changes)))
        return record_id

    def toggle_active(self, record_id: str, org_id: str) -> str:
        record = self.get_or_raise(record_id, org_id)
        self._storage[record_id] = record.model_copy(
            update={"is_active": not record.is_active, "updated_at": datetime.now(timezone.utc)}
        )
        return record_id

    def delete(self, record_id: str, org_id: str) -> str:
        self.get_or_raise(record_id, org_id)
        del self._storage[record_id]
        logger.info("Deleted automation %s", record_id)
        return record_id


class SqlAlchemyAutomationRepository(AutomationRepository):
    """Repository backed by a SQLAlchemy session factory (e.g. a sessionmaker)."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        registries: Dict[str, Registry] | None = None,
    ) -> None:
        super().__init__(registries)
        self._session_factory = session_factory

    def _load(self, session: Session, record_id: str, org_id: str) -> AutomationModel:
        row = session.get(AutomationModel, record_id)
        if row is None:
            raise AutomationNotFoundError("Automation not found")
        self._check_org(record_id, row.org_id, org_id)
        return row

    def save(self, automation: Automation, org_id: str, created_by: str) -> str:
        self._check_automation(automation)
        row = pydantic_to_db_automation(automation, org_id=org_id, created_by=created_by)
        with self._session_factory() as session:
            session.add(row)
            session.commit()
            record_id = row.id
        logger.info("Saved automation %s for org %s", record_id, org_id)
        return record_id

    def get(self, record_id: str, org_id: str) -> AutomationRecord | None:
        with self._session_factory() as session:
            row = session.get(AutomationModel, record_id)
            if row is None:
                return None
            self._check_org(record_id, row.org_id, org_id)
            return db_to_pydantic_automation(row)

    def _list(self, org_id: str, active_only: bool) -> List[AutomationRecord]:
        query = select(AutomationModel).where(AutomationModel.org_id == org_id)
        if active_only:
            query = query.where(AutomationModel.is_active.is_(True))
        with self._session_factory() as session:
            rows = session.scalars(query).all()
            return _sort_by_name([db_to_pydantic_automation(row) for row in rows])

    def list_all(self, org_id: str) -> List[AutomationRecord]:
        return self._list(org_id, active_only=False)

    def list_active(self, org_id: str) -> List[AutomationRecord]:
        return self._list(org_id, active_only=True)

    def update(self, record_id: str, org_id: str, updates: AutomationUpdate) -> str:
        changes = self._collect_updates(updates)
        with self._session_factory() as session:
            row = self._load(session, record_id, org_id)
            for name, value in changes.items():
                if name == "trigger":
                    value = trigger_to_json(value)
                elif name == "nodes":
                    value = nodes_to_json(value)
                setattr(row, name, value)
            row.updated_at = datetime.now(timezone.utc)
            session.commit()
        logger.info("Updated automation %s: %s", record_id, ", ".join(sorted(changes)))
        return record_id

    def toggle_active(self, record_id: str, org_id: str) -> str:
        with self._session_factory() as session:
            row = self._load(session, record_id, org_id)
            row.is_active = not row.is_active
            row.updated_at = datetime.now(timezone.utc)
            session.commit()
        return record_id

    def delete(self, record_id: str, org_id: str) -> str:
        with self._session_factory() as session:
            row = self._load(session, record_id, org_id)
            session.delete(row)
            session.commit()
        logger.info("Deleted automation %s", record_id)
        return record_id
