import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from .models import Base

logger = logging.getLogger(__name__)


def create_session_factory(database_url: str, echo: bool = False) -> sessionmaker:
    """Create the engine, make sure the tables exist, and return a session factory."""
    engine = create_engine(database_url, echo=echo)
    Base.metadata.create_all(engine)
    logger.debug("Database ready at %s", engine.url.render_as_string(hide_password=True))
    return sessionmaker(bind=engine)
