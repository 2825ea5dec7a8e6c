from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.attributes import flag_modified

from .conditions import positional_text
from .config import Settings
from .exceptions import ConnectionFailed
from .logger import logger
from .models import Base


def open_connection(settings=None):
    """
    Create the engine described by ``settings`` (read from the environment
    when omitted) and make sure every table exists.
    """
    settings = settings or Settings.from_env()

    logger.debug(f"Opening connection to {settings.safe_url}")
    engine = create_engine(settings.database_url, echo=settings.echo)

    try:
        Base.metadata.create_all(engine)
    except OperationalError as e:
        engine.dispose()
        raise ConnectionFailed(f"Failed to create a connection to database {settings.safe_url}") from e

    return engine


def create_session_factory(engine):
    return sessionmaker(engine, expire_on_commit=False)


def execute(session, sql, *args):
    """
    Run raw SQL with positional ``?`` parameters and return the cursor result
    (``rowcount`` holds the number of affected rows).
    """
    return session.execute(positional_text(sql, args))


def raw(session, sql, *args):
    return session.execute(positional_text(sql, args))


def create(session, *instances):
    """
    Insert ``instances`` and return how many rows were written.
    """
    session.add_all(instances)
    session.flush()

    affected = sum(1 for obj in instances if inspect(obj).persistent)
    logger.debug(f"Created {affected} row(s)")
    return affected


# Stamped by the database layer, never copied from the instance
_SAVE_SKIPPED = ("created_at", "updated_at")


def save(session, obj):
    """
    Write every column of ``obj``, changed or not, as a single UPDATE.
    """
    mapper = inspect(type(obj))
    for attr in mapper.column_attrs:
        if attr.key in _SAVE_SKIPPED or any(col.primary_key for col in attr.columns):
            continue
        flag_modified(obj, attr.key)

    session.flush()
    logger.debug(f"Saved {obj}")
    return obj
