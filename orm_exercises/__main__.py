import argparse
import logging
import sys

from faker import Faker
from sqlalchemy.exc import SQLAlchemyError

from . import exercises
from .config import Settings
from .database import open_connection, create_session_factory, create
from .exceptions import ExerciseError
from .logger import logger
from .models import User, Name


def _describe(outcome):
    if isinstance(outcome, Exception):
        return f"error {type(outcome).__name__}"
    if isinstance(outcome, (list, tuple)):
        return f"{len(outcome)} result(s)"
    return repr(outcome)


def add_fake_users(Session, count, seed=42):
    fake = Faker()
    fake.seed_instance(seed)

    users = [
        User(
            id=f"fake-{i}",
            password=fake.password(),
            name=Name(
                first_name=fake.first_name(),
                middle_name=fake.first_name(),
                last_name=fake.last_name(),
            ),
        )
        for i in range(1, count + 1)
    ]
    with Session.begin() as session:
        return create(session, *users)


def run_exercises(settings, fake_users=0):
    """
    Play every exercise against the database described by ``settings``.
    Returns the number of steps that failed.
    """
    engine = open_connection(settings)
    Session = create_session_factory(engine)

    steps = exercises.SEED_STEPS + exercises.QUERY_STEPS + exercises.UPDATE_STEPS
    failures = 0
    try:
        if fake_users:
            logger.info(f"Added {add_fake_users(Session, fake_users)} fake user(s)")

        for step in steps:
            try:
                outcome = step(Session)
            except (SQLAlchemyError, ExerciseError):
                logger.exception(f"{step.__name__}: failed")
                failures += 1
                continue

            logger.info(f"{step.__name__}: {_describe(outcome)}")
    finally:
        engine.dispose()

    logger.info(f"Ran {len(steps)} exercises, {failures} failed")
    return failures


def main(argv=None):
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(prog="orm_exercises")
    parser.add_argument("--url", default=settings.database_url)
    parser.add_argument("--quiet", action="store_true", help="do not echo SQL statements")
    parser.add_argument("--fake-users", type=int, default=0)
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args(argv)

    settings.database_url = args.url
    settings.echo = settings.echo and not args.quiet
    settings.log_level = args.log_level.upper()

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)-8s %(name)s: %(message)s")

    failures = run_exercises(settings, fake_users=args.fake_users)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
