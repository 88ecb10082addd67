"""User accounts checked by the login form."""

import logging
import sqlite3
import threading
from datetime import datetime
from pathlib import Path

from werkzeug.security import check_password_hash, generate_password_hash

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT UNIQUE NOT NULL,
    password_hash TEXT NOT NULL,
    registered_at TEXT NOT NULL
);
"""


class UserExistsError(Exception):
    """Raised when registering a username that is already taken."""


class UserStore:
    """Usernames and password hashes for the login form.

    Accounts from the ``users`` section of the config are read-only. Accounts
    created through the signup screen are written to SQLite, so every worker
    process sharing ``db_path`` sees them and they survive restarts.
    """

    def __init__(self, db_path: str = "data/secure-access.db", users: dict[str, str] | None = None):
        self.db_path = db_path
        self._configured: dict[str, str] = dict(users or {})
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()

    def init_db(self):
        """Create the users table."""
        with self._lock:
            self.conn.executescript(SCHEMA)
            self.conn.commit()

    def close(self):
        self.conn.close()

    def __enter__(self):
        self.init_db()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _get_hash(self, username: str) -> str | None:
        if username in self._configured:
            return self._configured[username]
        with self._lock:
            row = self.conn.execute(
                "SELECT password_hash FROM users WHERE username = ?", (username,)
            ).fetchone()
        return row["password_hash"] if row else None

    def exists(self, username: str) -> bool:
        return self._get_hash(username) is not None

    def add_user(self, username: str, password: str) -> None:
        username = username.strip()
        if not username or not password:
            raise ValueError("Username and password are required")
        if username in self._configured:
            raise UserExistsError(f"User '{username}' already exists")

        pw_hash = generate_password_hash(password)
        with self._lock:
            try:
                self.conn.execute(
                    "INSERT INTO users (username, password_hash, registered_at) VALUES (?, ?, ?)",
                    (username, pw_hash, datetime.now().isoformat()),
                )
                self.conn.commit()
            except sqlite3.IntegrityError:
                self.conn.rollback()
                raise UserExistsError(f"User '{username}' already exists")
        logger.info(f"Registered user '{username}'")

    def verify(self, username: str, password: str) -> bool:
        pw_hash = self._get_hash(username)
        if pw_hash is None:
            return False
        return check_password_hash(pw_hash, password)

    def __len__(self) -> int:
        with self._lock:
            registered = self.conn.execute("SELECT username FROM users").fetchall()
        return len(self._configured.keys() | {row["username"] for row in registered})
