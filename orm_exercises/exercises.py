"""
The exercise sequence, one function per step. Each step takes a session
factory, runs in its own session and returns what the step demonstrates
(an affected-row count, the loaded records, or the error a failing
transaction produced).
"""
from sqlalchemy import select, update, or_, not_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import load_only

from .conditions import inline, example_criteria, mapping_criteria, non_zero_values
from .database import execute, raw, create, save
from .exceptions import ExerciseError
from .logger import logger
from .models import User, Name, SampleRecord, UserResponse
from .queries import first_user, last_user, take_user, find_users, find_where, project_users
from .scanning import scan, scan_one, scan_row, iter_rows

PASSWORD = "rahasia"

SAMPLES = [
    (1, "Golang"),
    (2, "Python"),
    (3, "Java"),
]


def make_user(id, first_name, **kwargs):
    return User(id=str(id), password=PASSWORD, name=Name(first_name=first_name), **kwargs)


# Raw SQL

def insert_samples(Session):
    affected = 0
    with Session.begin() as session:
        for id, name in SAMPLES:
            result = execute(session, "INSERT INTO sample(id, name) values(?, ?)", id, name)
            affected += result.rowcount
    return affected


def raw_scan_samples(Session):
    with Session() as session:
        sample = scan_one(raw(session, "SELECT id, name FROM sample WHERE id = ?", 1), SampleRecord)
        samples = scan(raw(session, "SELECT id, name FROM sample"), SampleRecord)
    return sample, samples


def sql_rows(Session):
    samples = []
    with Session() as session:
        for id, name in iter_rows(raw(session, "SELECT id, name FROM sample")):
            samples.append(SampleRecord(id=id, name=name))
    return samples


def scan_rows(Session):
    samples = []
    with Session() as session:
        result = raw(session, "SELECT id, name FROM sample")
        try:
            for row in result:
                scan_row(row, SampleRecord, samples)
        finally:
            result.close()
    return samples


# Create

def create_user(Session):
    user = User(
        id="1",
        password=PASSWORD,
        name=Name(first_name="Aditya", middle_name="Jago", last_name="Prasetyo"),
        information="ini akan di ignore",
    )
    with Session.begin() as session:
        return create(session, user)


def batch_insert(Session):
    users = [make_user(i, f"User{i}") for i in range(2, 10)]
    with Session.begin() as session:
        return create(session, *users)


# Transactions

def transaction_success(Session):
    users = [make_user(i, f"User {i}") for i in (10, 11, 12)]
    with Session.begin() as session:
        return create(session, *users)


def transaction_error(Session):
    """
    Commit user 14, then try to create user 12 a second time. Returns the
    error raised by the failing transaction, which is rolled back.
    """
    with Session.begin() as session:
        session.add(make_user(14, "User 13"))

    try:
        with Session.begin() as session:
            session.add(make_user(12, "User 12"))
    except IntegrityError as e:
        logger.debug(f"Transaction rolled back: {e.orig}")
        return e

    return None


def manual_transaction(Session, ids):
    session = Session()
    transaction = session.begin()
    try:
        for id in ids:
            session.add(make_user(id, f"User {id}"))
            session.flush()
        transaction.commit()
    except IntegrityError as e:
        logger.debug(f"Rolling back manual transaction: {e.orig}")
        transaction.rollback()
        return e
    finally:
        session.close()

    return None


def manual_transaction_success(Session):
    return manual_transaction(Session, [15, 16])


def manual_transaction_error(Session):
    return manual_transaction(Session, [17, 16])


# Queries

def query_single_object(Session):
    with Session() as session:
        return first_user(session), last_user(session)


def query_inline_condition(Session):
    with Session() as session:
        return take_user(session, "id = ?", 1)


def query_all_objects(Session):
    with Session() as session:
        return find_users(session, "id in ?", ["1", "2", "3", "4", "5"])


def query_condition(Session):
    with Session() as session:
        return find_where(session, inline("first_name like ?", "%User%"), User.password == PASSWORD)


def or_operator(Session):
    with Session() as session:
        return find_where(session, or_(inline("first_name like ?", "%User%"), User.password == PASSWORD))


def not_operator(Session):
    with Session() as session:
        return find_where(session, not_(inline("first_name like ?", "%User%")), inline("password = ?", PASSWORD))


def select_fields(Session):
    with Session() as session:
        stmt = select(User).options(load_only(User.id, User.first_name))
        return session.scalars(stmt).all()


def struct_condition(Session):
    # last_name is "", so it takes no part in the condition
    example = User(password=PASSWORD, name=Name(first_name="User 10", last_name=""))
    with Session() as session:
        return find_where(session, *example_criteria(User, example))


def map_condition(Session):
    with Session() as session:
        return find_where(session, *mapping_criteria(User, {"middle_name": "", "last_name": ""}))


def order_limit_offset(Session):
    with Session() as session:
        return find_where(session, order_by="id asc, first_name desc", limit=5, offset=5)


def query_non_model(Session):
    with Session() as session:
        return project_users(session, UserResponse, User.id, User.first_name, User.last_name)


# Updates

def save_user(Session):
    with Session.begin() as session:
        user = take_user(session, "id = ?", 1)
        if user is None:
            raise ExerciseError("User '1' does not exist, nothing to save")

        user.name = Name(first_name="Aditya Prasetyo", middle_name="", last_name="test")
        user.password = PASSWORD
        save(session, user)
    return user


def update_selected_columns(Session):
    affected = []
    with Session.begin() as session:
        result = session.execute(
            update(User).where(User.id == "1").values(middle_name="Jago", last_name="Prasetyo")
        )
        affected.append(result.rowcount)

        result = session.execute(
            update(User).where(User.id == "1").values(password="rahasialagi")
        )
        affected.append(result.rowcount)

        # Only the non-zero fields of the example are written
        changes = User(name=Name(first_name="Aditya", middle_name="Jago", last_name="Prasetyo"))
        result = session.execute(
            update(User).where(User.id == "1").values(**non_zero_values(changes))
        )
        affected.append(result.rowcount)
    return affected


SEED_STEPS = [
    insert_samples,
    create_user,
    batch_insert,
    transaction_success,
    transaction_error,
    manual_transaction_success,
    manual_transaction_error,
]

QUERY_STEPS = [
    raw_scan_samples,
    sql_rows,
    scan_rows,
    query_single_object,
    query_inline_condition,
    query_all_objects,
    query_condition,
    or_operator,
    not_operator,
    select_fields,
    struct_condition,
    map_condition,
    order_limit_offset,
    query_non_model,
]

UPDATE_STEPS = [
    save_user,
    update_selected_columns,
]


def seed(Session):
    for step in SEED_STEPS:
        step(Session)
