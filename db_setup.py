import sqlite3
from contextlib import contextmanager

from settings import settings


def init_db(db_path=None):
    conn = get_db_connection(db_path)
    cursor = conn.cursor()

    cursor.execute('''
        CREATE TABLE IF NOT EXISTS Contact (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            phoneNumber TEXT,
            email TEXT,
            linkedId INTEGER,
            linkPrecedence TEXT CHECK(linkPrecedence IN ('secondary', 'primary')),
            createdAt DATETIME DEFAULT (strftime('%Y-%m-%dT%H:%M:%f000+00:00', 'now')),
            updatedAt DATETIME DEFAULT (strftime('%Y-%m-%dT%H:%M:%f000+00:00', 'now')),
            deletedAt DATETIME,
            FOREIGN KEY (linkedId) REFERENCES Contact (id)
        )
    ''')
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_contact_email ON Contact (email)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_contact_phone ON Contact (phoneNumber)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_contact_linked ON Contact (linkedId)")

    conn.close()


def get_db_connection(db_path=None):
    # isolation_level=None: transactions are opened explicitly by transaction()
    conn = sqlite3.connect(
        db_path or settings.database_path,
        timeout=settings.db_timeout,
        isolation_level=None,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def transaction(db_path=None):
    """
    Run a block of store calls as one atomic unit.

    BEGIN IMMEDIATE takes the database write lock before the first read, so
    two requests can never both observe "no match" for the same identifier.
    Any exception rolls the whole unit back.
    """
    conn = get_db_connection(db_path)
    try:
        conn.execute("BEGIN IMMEDIATE")
        yield conn
        conn.execute("COMMIT")
    except BaseException:
        if conn.in_transaction:
            conn.execute("ROLLBACK")
        raise
    finally:
        conn.close()
