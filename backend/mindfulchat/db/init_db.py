"""
Database initialization script.
"""
from mindfulchat.core.config import settings
from mindfulchat.core.logging import configure_logging
from mindfulchat.db.session import SessionLocal, init_db
from mindfulchat.db.seed import seed_exercises

if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    print("Initializing database...")
    init_db()
    db = SessionLocal()
    try:
        created = seed_exercises(db)
    finally:
        db.close()
    print(f"Database initialized successfully! ({len(created)} exercises seeded)")
