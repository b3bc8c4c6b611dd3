"""Cross-operation checks: placeholder count matches bound arguments and output parses as SQL."""

from typing import Callable

import pytest
import sqlglot

from querycraft import BuiltQuery, Dialect, QueryBuilder, delete, insert, select, update

SQLGLOT_DIALECTS = {Dialect.POSTGRES: "postgres", Dialect.MYSQL: "mysql", Dialect.MARIADB: "mysql"}

STATEMENTS: "dict[str, Callable[[Dialect], QueryBuilder]]" = {
    "select": lambda d: (
        select(d, "orders o", "o.customer_id")
        .aggregate("SUM", "o.amount", "total")
        .inner_join("customers c", "c.id = o.customer_id")
        .where("o.status = ?", "paid")
        .where_in("o.region", ["eu", "us"])
        .where_between("o.created", "2024-01-01", "2024-06-30")
        .group_by("o.customer_id")
        .having("SUM(o.amount) > ?", 100)
        .order_by("o.customer_id", "asc")
        .limit(20)
        .offset(40)
    ),
    "select_distinct": lambda d: select(d, "users", "name").distinct().where("age > ?", 30),
    "insert": lambda d: insert(d, "users").values(name="ana", age=31, email="ana@example.com").returning("id"),
    "update": lambda d: update(d, "users").set(name="bob", age=26).where("id = ?", 2).where_in("role", ["a", "b"]),
    "delete": lambda d: delete(d, "users").where("age < ?", 18).where_between("id", 10, 20),
}


@pytest.fixture(params=sorted(STATEMENTS))
def built(request: pytest.FixtureRequest, dialect: Dialect) -> BuiltQuery:
    return STATEMENTS[request.param](dialect).build()


def test_placeholder_count_matches_parameters(built: BuiltQuery) -> None:
    assert built.placeholder_count == len(built.parameters)


def test_postgres_placeholders_are_sequential(built: BuiltQuery) -> None:
    if built.dialect is not Dialect.POSTGRES:
        pytest.skip("numbered placeholders only")

    expected = " ".join(f"${index}" for index in range(1, len(built.parameters) + 1))
    found = " ".join(token.strip(",()") for token in built.sql.split() if token.strip(",()").startswith("$"))

    assert found == expected


def test_output_parses_for_dialect(built: BuiltQuery) -> None:
    assert built.dialect is not None
    expression = sqlglot.parse_one(built.sql, read=SQLGLOT_DIALECTS[built.dialect])

    assert expression is not None


def test_update_argument_binding_by_substitution() -> None:
    """Test substituting arguments left to right reproduces the intended binding."""
    query = update(Dialect.MYSQL, "t").set({"b": "B", "a": "A"}).where("c = ?", "C").build()

    rendered = query.sql
    for value in query.parameters:
        rendered = rendered.replace("?", repr(value), 1)

    assert rendered == "UPDATE `t` SET `a` = 'A', `b` = 'B' WHERE c = 'C'"
