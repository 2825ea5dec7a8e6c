from sqlalchemy import select, not_
import pytest

from orm_exercises import exercises
from orm_exercises.conditions import inline
from orm_exercises.models import User, UserResponse
from orm_exercises.queries import take_user, find_users, find_where, first_user


class TestQuery:
    def test_query_single_object(self, SeededSessionFactory):
        first, last = exercises.query_single_object(SeededSessionFactory)

        assert first.id == "1"
        # Primary keys are strings, so "9" sorts last
        assert last.id == "9"

    def test_query_single_object_inline_condition(self, SeededSessionFactory):
        user = exercises.query_inline_condition(SeededSessionFactory)

        assert user.id == "1"
        assert user.name.first_name == "Aditya"

    def test_take_without_match(self, SeededSessionFactory):
        with SeededSessionFactory() as session:
            assert take_user(session, "id = ?", "100") is None

    def test_query_all_objects(self, SeededSessionFactory):
        users = exercises.query_all_objects(SeededSessionFactory)
        assert sorted(u.id for u in users) == ["1", "2", "3", "4", "5"]

    def test_find_without_condition(self, SeededSessionFactory):
        with SeededSessionFactory() as session:
            assert len(find_users(session)) == 15

    def test_query_condition(self, SeededSessionFactory):
        users = exercises.query_condition(SeededSessionFactory)
        assert len(users) == 14
        assert "1" not in {u.id for u in users}

    def test_or_operator(self, SeededSessionFactory):
        users = exercises.or_operator(SeededSessionFactory)
        assert len(users) == 15

    def test_not_operator(self, SeededSessionFactory):
        users = exercises.not_operator(SeededSessionFactory)
        assert [u.id for u in users] == ["1"]

    def test_select_fields(self, SeededSessionFactory):
        users = exercises.select_fields(SeededSessionFactory)

        assert len(users) == 15
        for user in users:
            assert user.id is not None
            assert user.first_name != ""

    def test_struct_condition(self, SeededSessionFactory):
        users = exercises.struct_condition(SeededSessionFactory)
        assert [u.id for u in users] == ["10"]

    def test_map_condition(self, SeededSessionFactory):
        users = exercises.map_condition(SeededSessionFactory)
        assert len(users) == 14

    def test_order_limit_offset(self, SeededSessionFactory):
        users = exercises.order_limit_offset(SeededSessionFactory)
        assert [u.id for u in users] == ["15", "16", "2", "3", "4"]

    def test_query_non_model(self, SeededSessionFactory):
        users = exercises.query_non_model(SeededSessionFactory)

        assert len(users) == 15
        assert all(isinstance(u, UserResponse) for u in users)
        assert UserResponse(id="1", first_name="Aditya", last_name="Prasetyo") in users

    @pytest.mark.parametrize(
        "pattern, negate, expected_ids",
        [
            ("User 1_", False, {"10", "11", "12", "14", "15", "16"}),
            ("User1%", False, set()),
            ("User%", False, {str(i) for i in range(2, 13)} | {"14", "15", "16"}),
            ("User%", True, {"1"}),
        ]
    )
    def test_like_patterns(self, SeededSessionFactory, pattern, negate, expected_ids):
        with SeededSessionFactory() as session:
            if negate:
                users = find_where(session, ~User.first_name.like(pattern))
            else:
                users = find_where(session, User.first_name.like(pattern))

            assert {u.id for u in users} == expected_ids

    def test_inline_condition_can_be_negated(self, SeededSessionFactory):
        clause = not_(inline("first_name like ?", "%User%"))
        assert str(clause) == "NOT (first_name like :p0)"

        with SeededSessionFactory() as session:
            assert [u.id for u in find_where(session, clause)] == ["1"]

    def test_inline_condition_in_select(self, SeededSessionFactory):
        with SeededSessionFactory() as session:
            stmt = select(User.id).where(inline("first_name = ? OR last_name = ?", "User 10", "Prasetyo"))
            assert set(session.scalars(stmt).all()) == {"1", "10"}

    def test_first_on_empty_table(self, SessionFactory):
        with SessionFactory() as session:
            assert first_user(session) is None
