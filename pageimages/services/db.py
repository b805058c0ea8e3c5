# pageimages/services/db.py
# Responsibility: Provides centralized database connection management and transaction handling.

from typing import Optional

import psycopg2

from pageimages.config.settings import settings


def get_raw_connection(dsn: Optional[str] = None):
    """
    Creates and returns a raw psycopg2 connection.

    Args:
        dsn (Optional[str]): Connection string of another wiki database. Defaults to the local one.

    Returns:
        psycopg2.extensions.connection: A new database connection.
    """
    conn = psycopg2.connect(dsn or settings.DB.URL)
    conn.autocommit = False
    return conn

class DBTransaction:
    """
    Context manager for database transactions.
    Commits on success, rolls back on exception, always closes the connection.

    Usage:
        with DBTransaction() as conn:
            with conn.cursor() as cur:
                cur.execute(...)
    """
    def __init__(self, dsn: Optional[str] = None):
        self.dsn = dsn
        self.conn = None

    def __enter__(self):
        try:
            self.conn = get_raw_connection(self.dsn)
            return self.conn
        except Exception as e:
            print(f"[DB] Connection failed: {e}")
            raise

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn:
            try:
                if exc_type:
                    self.conn.rollback()
                    print(f"[DB] Transaction rolled back due to error: {exc_val}")
                else:
                    self.conn.commit()
            except Exception as e:
                print(f"[DB] Transaction finalization failed: {e}")
                # The original exception, if any, is not suppressed
            finally:
                self.conn.close()
