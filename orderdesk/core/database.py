import os
import sqlite3
import threading


class Database:
    # Serializes table creation across request threads
    _lock = threading.Lock()
    _initialized = set()

    @staticmethod
    def connect(path):
        return sqlite3.connect(path)

    @classmethod
    def ensure_schema(cls, path, statements):
        """
        Run CREATE statements once per database path.
        Creates the parent directory when it is missing.
        """
        key = (path, tuple(statements))
        if key in cls._initialized:
            return
        with cls._lock:
            if key in cls._initialized:
                return
            db_dir = os.path.dirname(path)
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)
            with cls.connect(path) as conn:
                cursor = conn.cursor()
                for statement in statements:
                    cursor.execute(statement)
                conn.commit()
            cls._initialized.add(key)
