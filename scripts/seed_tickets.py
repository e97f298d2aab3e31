# scripts/seed_tickets.py
"""
Insert a few demo tickets into the local database.

Usage: python -m scripts.seed_tickets
"""
from datetime import datetime, timedelta, timezone

from support_dashboard.backend.app.db import Base, SessionLocal, engine
from support_dashboard.backend.app.models.ticket import Ticket

DEMO_TICKETS = [
    ("Printer jam on 3rd floor", "Paper stuck in tray 2", "Alice Moyo", "open", "high", "hardware"),
    ("Cannot log in to VPN", "Error 809 since this morning", "Brian Phiri", "open", "urgent", "network"),
    ("Install Excel add-in", "", "Chipo Banda", "in_progress", "low", "software"),
    ("Password reset", "Locked out after holiday", "Dan Mwale", "resolved", "normal", "account"),
    ("Shared drive access", "Need access to Finance share", "Esther Zulu", "closed", "normal", "access"),
]


def seed() -> int:
    Base.metadata.create_all(engine)
    now = datetime.now(timezone.utc)
    db = SessionLocal()
    try:
        for i, (title, desc, name, status, priority, category) in enumerate(DEMO_TICKETS):
            created = now - timedelta(hours=len(DEMO_TICKETS) - i)
            db.add(
                Ticket(
                    title=title,
                    description=desc,
                    requester_name=name,
                    status=status,
                    priority=priority,
                    category=category,
                    created_at=created,
                    updated_at=now if status == "resolved" else created,
                )
            )
        db.commit()
    finally:
        db.close()
    print(f"[SEED] Inserted {len(DEMO_TICKETS)} tickets")
    return len(DEMO_TICKETS)


if __name__ == "__main__":
    seed()
