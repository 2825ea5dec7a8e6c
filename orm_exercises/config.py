from dataclasses import dataclass
import os

from sqlalchemy.engine import URL, make_url

ENV_PREFIX = "ORM_EXERCISES_"

DEFAULT_DATABASE_URL = "sqlite://"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def mysql_url(
    user="root",
    password=None,
    host="localhost",
    port=3306,
    database="orm_exercises",
    charset="utf8mb4",
    timezone=None,
    drivername="mysql",
):
    """
    Build the URL of a MySQL schema.

    ``timezone`` is applied to every new connection through the driver's
    ``init_command``, e.g. ``timezone="+07:00"``.
    """
    query = {"charset": charset}
    if timezone:
        query["init_command"] = f"SET time_zone = '{timezone}'"

    return URL.create(
        drivername,
        username=user,
        password=password,
        host=host,
        port=port,
        database=database,
        query=query,
    )


@dataclass
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    echo: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ

        settings = cls()
        if f"{ENV_PREFIX}DATABASE_URL" in environ:
            settings.database_url = environ[f"{ENV_PREFIX}DATABASE_URL"]
        if f"{ENV_PREFIX}ECHO" in environ:
            settings.echo = environ[f"{ENV_PREFIX}ECHO"].strip().lower() in _TRUE_VALUES
        if f"{ENV_PREFIX}LOG_LEVEL" in environ:
            settings.log_level = environ[f"{ENV_PREFIX}LOG_LEVEL"].strip().upper()
        return settings

    @property
    def safe_url(self):
        return make_url(self.database_url).render_as_string(hide_password=True)
