from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import String, inspect
from sqlalchemy.orm import declarative_base, mapped_column, composite, validates, Mapped

from .exceptions import ExerciseError

Base = declarative_base()


@dataclass
class Name:
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""


@dataclass
class SampleRecord:
    id: str
    name: str


@dataclass
class UserResponse:
    id: str
    first_name: str = ""
    last_name: str = ""


def _stamp_from_created_at(context):
    # Inserted rows carry one timestamp in both columns
    return context.get_current_parameters()["created_at"]


class Sample(Base):
    __tablename__ = "sample"
    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(100))

    def __repr__(self):
        return f"Sample(id={self.id} name={self.name})"


class User(Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    password: Mapped[str] = mapped_column(String(100))

    # Embedded name, flattened into three columns
    first_name: Mapped[str] = mapped_column(String(100), default="")
    middle_name: Mapped[str] = mapped_column(String(100), default="")
    last_name: Mapped[str] = mapped_column(String(100), default="")
    name: Mapped[Name] = composite("first_name", "middle_name", "last_name")

    created_at: Mapped[datetime] = mapped_column(default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(default=_stamp_from_created_at, onupdate=datetime.now)

    # Accepted by the constructor, never persisted
    information = None

    @validates("id")
    def _validate_id(self, key, value):
        if inspect(self).key is not None:
            raise ExerciseError(f"Column '{key}' can only be written on create")
        return value

    def __repr__(self):
        return f"User(id={self.id} name={self.name})"
