import pytest

from orm_exercises.config import Settings
from orm_exercises.database import open_connection, create_session_factory
from orm_exercises.exercises import seed


@pytest.fixture
def engine():
    engine = open_connection(Settings(database_url="sqlite://", echo=False))
    yield engine
    engine.dispose()


@pytest.fixture
def SessionFactory(engine):
    yield create_session_factory(engine)


@pytest.fixture
def SeededSessionFactory(SessionFactory):
    """
    Database state after every create/transaction exercise:
    3 samples and 15 users (1..12, 14, 15, 16).
    """
    seed(SessionFactory)
    yield SessionFactory
