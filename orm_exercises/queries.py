from sqlalchemy import select, text

from .conditions import inline
from .models import User
from .scanning import scan


def first_user(session):
    return session.scalars(select(User).order_by(User.id).limit(1)).first()


def last_user(session):
    return session.scalars(select(User).order_by(User.id.desc()).limit(1)).first()


def take_user(session, condition, *args):
    """
    Return the first user matching ``condition``, without any ordering.
    """
    return session.scalars(select(User).where(inline(condition, *args)).limit(1)).first()


def find_users(session, condition=None, *args):
    stmt = select(User)
    if condition is not None:
        stmt = stmt.where(inline(condition, *args))
    return session.scalars(stmt).all()


def find_where(session, *criteria, order_by=None, limit=None, offset=None):
    stmt = select(User)
    if criteria:
        stmt = stmt.where(*criteria)

    if order_by is not None:
        stmt = stmt.order_by(text(order_by) if isinstance(order_by, str) else order_by)
    if limit is not None:
        stmt = stmt.limit(limit)
    if offset is not None:
        stmt = stmt.offset(offset)

    return session.scalars(stmt).all()


def project_users(session, record_cls, *columns):
    """
    Select only ``columns`` from the users table and scan the rows into
    ``record_cls`` instead of ``User``.
    """
    return scan(session.execute(select(*columns)), record_cls)
