"""Create the finance tables in MySQL from schema.sql."""

import logging
import os

import mysql.connector
from config import Config

logger = logging.getLogger(__name__)

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'schema.sql')


def load_statements(schema_path=SCHEMA_PATH):
    # mysql-connector executes one statement per call
    with open(schema_path, 'r') as f:
        return [s.strip() for s in f.read().split(';') if s.strip()]


def init_db(schema_path=SCHEMA_PATH):
    statements = load_statements(schema_path)
    conn = mysql.connector.connect(
        host=Config.MYSQL_HOST,
        user=Config.MYSQL_USER,
        password=Config.MYSQL_PASSWORD,
        database=Config.MYSQL_DATABASE
    )
    try:
        with conn.cursor() as cur:
            for statement in statements:
                cur.execute(statement)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %d schema statements to %s", len(statements), Config.MYSQL_DATABASE)
    return len(statements)


if __name__ == "__main__":
    logging.basicConfig(level=Config.LOG_LEVEL)
    init_db()
