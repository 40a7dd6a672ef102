"""
PostgreSQL database connection and schema management.

Connects to PostgreSQL using DATABASE_URL (preferred) or individual
PGHOST/PGPORT/PGUSER/PGPASSWORD/PGDATABASE environment variables.
"""

import os
import logging
import psycopg2
from psycopg2.extras import RealDictCursor
from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)


SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS arcades (
        id SERIAL PRIMARY KEY,
        slug TEXT NOT NULL UNIQUE,
        title TEXT NOT NULL,
        description TEXT,
        category TEXT,
        difficulty TEXT,
        players_label TEXT,
        streak_label TEXT,
        created_at TIMESTAMPTZ DEFAULT NOW(),
        updated_at TIMESTAMPTZ DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS leaderboard (
        id SERIAL PRIMARY KEY,
        arcade_id INTEGER NOT NULL REFERENCES arcades(id) ON DELETE CASCADE,
        username TEXT NOT NULL,
        score INTEGER NOT NULL DEFAULT 0 CHECK (score >= 0),
        completion_time_seconds INTEGER CHECK (completion_time_seconds >= 0),
        created_at TIMESTAMPTZ DEFAULT NOW()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_leaderboard_ranking ON leaderboard(arcade_id, score DESC, completion_time_seconds ASC)",
    "CREATE INDEX IF NOT EXISTS idx_leaderboard_username ON leaderboard(username)",
    "CREATE INDEX IF NOT EXISTS idx_arcades_category ON arcades(category)",
]


def get_connection_string() -> str:
    """
    Get the PostgreSQL connection string.

    Priority:
    1. DATABASE_URL environment variable
    2. Individual PG* environment variables (PGHOST, PGPORT, PGUSER, PGPASSWORD, PGDATABASE)

    Returns:
        Connection string for PostgreSQL

    Raises:
        ValueError: If no valid connection configuration is found
    """
    database_url = os.getenv('DATABASE_URL')
    if database_url:
        return database_url

    pghost = os.getenv('PGHOST')
    pgport = os.getenv('PGPORT', '5432')
    pguser = os.getenv('PGUSER')
    pgpassword = os.getenv('PGPASSWORD')
    pgdatabase = os.getenv('PGDATABASE')

    if pghost and pguser and pgpassword and pgdatabase:
        return f"postgresql://{pguser}:{pgpassword}@{pghost}:{pgport}/{pgdatabase}"

    raise ValueError(
        "Database connection not configured. "
        "Set DATABASE_URL or PGHOST/PGUSER/PGPASSWORD/PGDATABASE environment variables."
    )


def get_connection():
    """
    Get a database connection to PostgreSQL.

    Returns:
        psycopg2 connection with RealDictCursor (returns rows as dictionaries)
    """
    try:
        return psycopg2.connect(get_connection_string(), cursor_factory=RealDictCursor)
    except Exception as e:
        logger.error(f"Failed to connect to PostgreSQL: {e}")
        raise


def init_database() -> None:
    """
    Create the arcade and leaderboard tables and their indexes.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    cursor = conn.cursor()

    try:
        for statement in SCHEMA_STATEMENTS:
            cursor.execute(statement)
        conn.commit()
        print("Database schema initialized successfully")

    except Exception as e:
        conn.rollback()
        print(f"Error initializing database: {e}")
        raise
    finally:
        cursor.close()
        conn.close()


if __name__ == "__main__":
    print("Initializing PostgreSQL schema...")
    init_database()
