"""Integration tests against a MySQL server

Requires MYSQL_TEST_DATABASE_URL (e.g. mysql+pymysql://user:pw@localhost/test);
skipped otherwise.
"""

import pytest

from db_access import Database

pytestmark = [pytest.mark.mysql, pytest.mark.integration]

TABLE = "db_access_it_people"


@pytest.fixture
def people(mysql_db: Database):
    """Temporary table with a commented column"""
    mysql_db.query(f"DROP TABLE IF EXISTS `{TABLE}`")
    assert mysql_db.query(
        f"CREATE TABLE `{TABLE}` ("
        "  Id INT AUTO_INCREMENT PRIMARY KEY,"
        "  Name VARCHAR(40) NOT NULL COMMENT 'Full name',"
        "  Active CHAR(1)"
        ")"
    ), mysql_db.error()
    try:
        yield mysql_db
    finally:
        mysql_db.query(f"DROP TABLE IF EXISTS `{TABLE}`")


class TestMySQL:
    """Test the MySQL specific behaviour."""

    def test_crud_round_trip(self, people: Database):
        first = people.insert_row(
            TABLE,
            {
                "Name": Database.sql_value("O'Brien"),
                "Active": Database.sql_value("on", "y-n"),
            },
        )
        assert first == 1
        assert people.update_rows(
            TABLE, {"Active": Database.sql_value(False, "y-n")}, {"Id": first}
        )
        row = people.select_single_row_array(TABLE, {"Id": first})
        assert row == {"Id": 1, "Name": "O'Brien", "Active": "N"}

    def test_percent_in_literal(self, people: Database):
        people.insert_row(TABLE, {"Name": Database.sql_value("100%")})
        assert people.select_single_value(TABLE, {"Name": "'100%'"}, "Name") == "100%"

    def test_column_metadata(self, people: Database):
        people.insert_row(TABLE, {"Name": Database.sql_value("x")})
        people.query(f"SELECT Id, Name FROM `{TABLE}`")
        assert people.get_column_data_type("Id") == "int"
        assert people.get_column_data_type("Name") == "string"
        assert people.get_column_comments(TABLE)["Name"] == "Full name"

    def test_statistics(self, people: Database):
        stats = people.get_statistics()
        assert "Uptime" in stats
        assert stats["Query Count"] > 0
        assert people.error() is None

    def test_select_database(self, people: Database):
        assert people.select_database(people.config.database, "utf8mb4") is True

    def test_truncate(self, people: Database):
        people.insert_row(TABLE, {"Name": Database.sql_value("x")})
        assert people.truncate_table(TABLE) is True
        assert people.query_single_value(f"SELECT COUNT(*) FROM `{TABLE}`") == 0
