"""Pytest configuration and shared fixtures for database tests"""

import os
from typing import Generator, Optional

import pytest
from dotenv import load_dotenv

from db_access import Database, DatabaseConfig

# Load environment variables
load_dotenv()

EMPLOYEE_TABLE = """
CREATE TABLE Employee (
    Id INTEGER PRIMARY KEY AUTOINCREMENT,
    Name VARCHAR(40) NOT NULL,
    Age INTEGER,
    Salary REAL,
    Hired DATE
)
"""

EMPLOYEES = [
    ("Alice", 31, 5200.5, "2019-04-01"),
    ("Bob", 25, 3100.0, "2021-09-15"),
    ("Carol", 47, 7400.0, "2008-01-07"),
]


# ==================== Configuration Fixtures ====================


@pytest.fixture(scope="session")
def mysql_database_url() -> Optional[str]:
    """MySQL test database URL from environment"""
    return os.getenv("MYSQL_TEST_DATABASE_URL")


@pytest.fixture
def sqlite_config() -> DatabaseConfig:
    """In-memory SQLite configuration"""
    return DatabaseConfig(url="sqlite://")


# ==================== SQLite Fixtures ====================


@pytest.fixture
def db(sqlite_config: DatabaseConfig) -> Generator[Database, None, None]:
    """Connected database holding an empty Employee table"""
    database = Database(sqlite_config)
    assert database.query(EMPLOYEE_TABLE) is not False
    try:
        yield database
    finally:
        database.close()


@pytest.fixture
def seeded_db(db: Database) -> Database:
    """Database whose Employee table holds three rows"""
    for name, age, salary, hired in EMPLOYEES:
        assert db.insert_row(
            "Employee",
            {
                "Name": Database.sql_value(name),
                "Age": Database.sql_value(age, "number"),
                "Salary": Database.sql_value(salary, "double"),
                "Hired": Database.sql_value(hired, "date"),
            },
        )
    return db


# ==================== MySQL Fixtures ====================


@pytest.fixture
def mysql_db(mysql_database_url: Optional[str]) -> Generator[Database, None, None]:
    """Database connected to the MySQL test server"""
    if not mysql_database_url:
        pytest.skip("MYSQL_TEST_DATABASE_URL not set in environment")
    database = Database(DatabaseConfig(url=mysql_database_url))
    if not database.is_connected():
        pytest.skip(f"MySQL test server unavailable: {database.error()}")
    try:
        yield database
    finally:
        database.close()


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "mysql: MySQL-specific tests")
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring database"
    )
