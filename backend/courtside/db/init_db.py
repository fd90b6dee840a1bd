"""
Database initialization script.
"""
from courtside.core.logging_config import setup_logging
from courtside.db.session import init_db

if __name__ == "__main__":
    setup_logging()
    print("Initializing database...")
    init_db()
    print("Database initialized successfully!")
