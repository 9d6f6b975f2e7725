# create_tables.py
import sys

from tracker.config.settings import settings
from tracker.database import Base, SessionLocal, engine, init_db
from tracker.services.user_manager import ensure_default_admin


def create_tables(drop_existing: bool = False):
    """Create all tables, optionally dropping the existing ones first"""
    try:
        if drop_existing:
            Base.metadata.drop_all(bind=engine)
            print("🗑️  Existing tables dropped")

        init_db()
        print(f"✅ All tables created successfully! ({settings.backend})")

        create_default_admin()
        return True
    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        return False


def create_default_admin():
    """Create the configured default admin user"""
    db = SessionLocal()
    try:
        admin = ensure_default_admin(db)
        print("✅ Default admin user ready!")
        print(f"   Email: {admin.email}")
    finally:
        db.close()


if __name__ == "__main__":
    ok = create_tables(drop_existing="--drop" in sys.argv[1:])
    sys.exit(0 if ok else 1)
