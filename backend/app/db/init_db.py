"""
Database initialization script.

    python -m app.db.init_db
"""
from app.core.config import settings
from app.db.session import create_db_engine, init_db

if __name__ == "__main__":
    print("Initializing database...")
    init_db(create_db_engine(settings.DATABASE_URL, echo=settings.DB_ECHO))
    print("Database initialized successfully!")
