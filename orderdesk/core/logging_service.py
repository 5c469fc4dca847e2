"""
Centralized logging service for the OrderDesk admin.
Provides structured logging with database storage and easy integration.
"""

import json
import traceback
from datetime import datetime
from flask import request, session, has_request_context
from .database import Database
from .config import Config, get_config_value

LOGS_SCHEMA = [
    f"""
    CREATE TABLE IF NOT EXISTS {Config.LOGS_TABLE} (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        timestamp TEXT NOT NULL,
        level TEXT NOT NULL,
        source TEXT NOT NULL,
        message TEXT NOT NULL,
        details TEXT,
        ip_address TEXT,
        user_agent TEXT,
        request_path TEXT,
        user_id TEXT
    )
    """,
    f"CREATE INDEX IF NOT EXISTS idx_logs_timestamp ON {Config.LOGS_TABLE}(timestamp DESC)",
    f"CREATE INDEX IF NOT EXISTS idx_logs_source ON {Config.LOGS_TABLE}(source)",
]


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _log_db():
        return get_config_value('LOG_DB')

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        return ip_address, request.headers.get('User-Agent', ''), request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (auth, orders, store_api, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier, defaults to the signed-in admin
        """
        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        if user_id is None and has_request_context():
            user_id = session.get('admin_email')

        try:
            db_path = LoggingService._log_db()
            Database.ensure_schema(db_path, LOGS_SCHEMA)

            ip_address, user_agent, request_path = LoggingService._get_request_context()
            timestamp = datetime.now().isoformat()

            with Database.connect(db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(f"""
                    INSERT INTO {Config.LOGS_TABLE}
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    timestamp, level.upper(), source, message, details,
                    ip_address, user_agent, request_path, user_id
                ))
                conn.commit()

        except Exception as e:
            # Fallback to console logging if database fails
            print(f"[{datetime.now().isoformat()}] [{level.upper()}] [{source}] {message}")
            if details:
                print(f"Details: {details}")
            print(f"Logging service error: {e}")

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log admin actions (login, status change, deletion)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events"""
        LoggingService.warning('security', message, details)

    @staticmethod
    def recent(limit=50, source=None):
        """Return the newest log entries as dicts, optionally for one source"""
        db_path = LoggingService._log_db()
        Database.ensure_schema(db_path, LOGS_SCHEMA)

        query = f"SELECT timestamp, level, source, message, details, request_path, user_id FROM {Config.LOGS_TABLE}"
        params = []
        if source:
            query += " WHERE source = ?"
            params.append(source)
        query += " ORDER BY id DESC LIMIT ?"
        params.append(limit)

        with Database.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            columns = [col[0] for col in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
