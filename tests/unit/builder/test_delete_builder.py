"""Unit tests for DELETE statement assembly."""

from querycraft import Dialect, Operation, delete


def test_delete_mysql() -> None:
    query = delete(Dialect.MYSQL, "t").where("id = ?", 7).build()

    assert query.sql == "DELETE FROM `t` WHERE id = ?"
    assert query.parameters == [7]
    assert query.operation is Operation.DELETE


def test_delete_postgres() -> None:
    query = delete(Dialect.POSTGRES, "table_name").where("col1 = ?", 100).build()

    assert query.sql == 'DELETE FROM "table_name" WHERE col1 = $1'
    assert query.parameters == [100]


def test_delete_without_where() -> None:
    sql, parameters = delete(Dialect.POSTGRES, "t").build()

    assert sql == 'DELETE FROM "t"'
    assert parameters == []


def test_delete_with_several_conditions() -> None:
    query = delete(Dialect.POSTGRES, "t").where("a = ?", 1).where_in("b", ["x", "y"]).where("c > ?", 3).build()

    assert query.sql == 'DELETE FROM "t" WHERE a = $1 AND "b" IN ($2, $3) AND c > $4'
    assert query.parameters == [1, "x", "y", 3]
