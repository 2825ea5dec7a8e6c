from .config import Settings, mysql_url
from .database import open_connection, create_session_factory
from .models import Base, Sample, User, Name

__all__ = [
    "Settings",
    "mysql_url",
    "open_connection",
    "create_session_factory",
    "Base",
    "Sample",
    "User",
    "Name",
]

__version__ = '0.1.0'
