from datetime import date, timedelta

from .config import settings
from .database import SessionLocal, init_db
from .services.booking_service import TIME_SLOTS
from .storage import DatabaseStorage


def init_database(days: int = 14, start: date | None = None) -> int:
    """Create tables and open availability rows for the next ``days`` days.

    Existing rows are left untouched. Returns the number of rows created.
    """
    init_db()

    db = SessionLocal()
    created = 0
    try:
        storage = DatabaseStorage(db)
        first = start or date.today()
        for offset in range(days):
            day = (first + timedelta(days=offset)).isoformat()
            for slot in TIME_SLOTS:
                if storage.get_availability(day, slot) is None:
                    storage.create_availability(day, slot, max_capacity=settings.default_slot_capacity)
                    created += 1
        print("✅ Database initialized successfully!")
        print(f"   - Opened {created} time slots over {days} days")
    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        db.rollback()
        raise
    finally:
        db.close()
    return created
