"""Tests for SQL statement generation."""

import pytest

from tablegate import ColumnWhitelist, GatewayConfig, MalformedQueryError
from tablegate.query import StatementFactory


@pytest.fixture
def factory(whitelist: ColumnWhitelist, config: GatewayConfig) -> StatementFactory:
    return StatementFactory(whitelist, config)


class TestSelects:
    """Tests for SELECT statements."""

    def test_select_all(self, factory: StatementFactory):
        statement = factory.select_all()
        assert statement.sql == "SELECT * FROM users"
        assert statement.bindings == []

    def test_select_all_with_order(self, factory: StatementFactory, config: GatewayConfig):
        config.order = "id DESC"
        assert factory.select_all().sql == "SELECT * FROM users ORDER BY id DESC"

    def test_select_where(self, factory: StatementFactory):
        statement = factory.select_where({"name": "Ada", "email": "a@x.com"})
        assert statement.sql == "SELECT * FROM users WHERE (name = :name AND email = :email)"
        assert statement.bindings == [(":name", "Ada"), (":email", "a@x.com")]
        assert statement.params == {"name": "Ada", "email": "a@x.com"}
        assert not statement.empty_conditions

    def test_select_where_follows_separator_changes(
        self, factory: StatementFactory, config: GatewayConfig
    ):
        """Config changes apply to the next statement."""
        config.separator = "OR"  # type: ignore[assignment]
        config.order = "name ASC"
        statement = factory.select_where({"name": "Ada", "email": "a@x.com"})
        assert statement.sql == (
            "SELECT * FROM users WHERE (name = :name OR email = :email) ORDER BY name ASC"
        )

    def test_select_where_empty_conditions(self, factory: StatementFactory):
        """No known condition leaves an empty group and flags it."""
        statement = factory.select_where({"bogus": 1})
        assert statement.sql == "SELECT * FROM users WHERE ()"
        assert statement.bindings == []
        assert statement.empty_conditions

    def test_values_never_in_sql_text(self, factory: StatementFactory):
        """Condition values are bound, not interpolated."""
        payload = "' OR '1'='1"
        statement = factory.select_where({"name": payload})
        assert payload not in statement.sql
        assert statement.bindings == [(":name", payload)]

    def test_select_subset_without_conditions(self, factory: StatementFactory):
        statement = factory.select_subset_where(["name", "bogus", "id"])
        assert statement.sql == "SELECT name, id FROM users"
        assert statement.bindings == []

    def test_select_subset_with_conditions(
        self, factory: StatementFactory, config: GatewayConfig
    ):
        config.order = "id ASC"
        statement = factory.select_subset_where(["email"], {"name": "Ada"})
        assert statement.sql == "SELECT email FROM users WHERE (name = :name) ORDER BY id ASC"
        assert statement.bindings == [(":name", "Ada")]

    def test_select_subset_empty_projection(self, factory: StatementFactory):
        statement = factory.select_subset_where(["bogus"])
        assert statement.empty_projection

    def test_select_subset_filtered_conditions_still_emit_group(
        self, factory: StatementFactory
    ):
        """Conditions that were all dropped do not widen the select to every row."""
        statement = factory.select_subset_where(["name"], {"bogus": 1})
        assert statement.sql == "SELECT name FROM users WHERE ()"
        assert statement.empty_conditions


class TestWrites:
    """Tests for INSERT/UPDATE/DELETE statements."""

    def test_insert(self, factory: StatementFactory):
        statement = factory.insert({"name": "Ada", "email": "a@x.com"})
        assert statement.sql == "INSERT INTO users (name,email) VALUES (:name,:email)"
        assert statement.bindings == [(":name", "Ada"), (":email", "a@x.com")]

    def test_insert_ignores_key_and_unknown(self, factory: StatementFactory):
        statement = factory.insert({"id": 9, "name": "Ada", "bogus": "x"})
        assert statement.sql == "INSERT INTO users (name) VALUES (:name)"
        assert statement.bindings == [(":name", "Ada")]

    def test_insert_never_has_order(self, factory: StatementFactory, config: GatewayConfig):
        config.order = "id DESC"
        assert "ORDER BY" not in factory.insert({"name": "Ada"}).sql

    def test_insert_only_key_field(self, factory: StatementFactory):
        statement = factory.insert({"id": 1})
        assert statement.empty_projection
        assert statement.sql == "INSERT INTO users () VALUES ()"

    def test_update(self, factory: StatementFactory):
        statement = factory.update({"name": "B", "id": 5}, 1)
        assert statement.sql == "UPDATE users SET name = :name WHERE id = :id"
        assert statement.bindings == [(":name", "B"), (":id", 1)]

    def test_update_multiple_columns(self, factory: StatementFactory):
        statement = factory.update({"name": "B", "email": "b@x.com"}, 3)
        assert statement.sql == "UPDATE users SET name = :name, email = :email WHERE id = :id"
        assert statement.params == {"name": "B", "email": "b@x.com", "id": 3}

    def test_update_empty_projection(self, factory: StatementFactory):
        assert factory.update({"bogus": 1}, 1).empty_projection

    def test_update_id_column_collides_with_placeholder(self):
        """A writable column named 'id' cannot share the identifier placeholder."""
        whitelist = ColumnWhitelist("accounts", {"user_id": "INTEGER", "id": "TEXT"})
        config = GatewayConfig(table="accounts", key_field="user_id")
        with pytest.raises(MalformedQueryError):
            StatementFactory(whitelist, config).update({"id": "x"}, 1)

    def test_delete(self, factory: StatementFactory):
        statement = factory.delete(4)
        assert statement.sql == "DELETE FROM users WHERE (id = :id)"
        assert statement.bindings == [(":id", 4)]

    def test_delete_custom_key(self, whitelist: ColumnWhitelist):
        config = GatewayConfig(table="users", key_field="email")
        statement = StatementFactory(whitelist, config).delete("a@x.com")
        assert statement.sql == "DELETE FROM users WHERE (email = :id)"
