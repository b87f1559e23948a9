"""
Seed the database with sample events.

Usage:
    python -m eventlist.seed

Clears the events table first. Writes go straight to the store, so the
past-date policy does not apply to these fixed sample dates.
"""

import asyncio
from datetime import datetime, timezone

from eventlist.core.logging import setup_logging, get_logger
from eventlist.db.session import AsyncSessionLocal, engine
from eventlist.domain.models import NewEvent
from eventlist.stores.interfaces import EventStore
from eventlist.stores.sqlalchemy_store import SqlAlchemyEventStore
from eventlist.utils.money import format_price

logger = get_logger(__name__)


def _at(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


SAMPLE_EVENTS = [
    NewEvent(
        title="Italian Cooking Masterclass",
        description="Learn to make authentic Italian pasta and sauces from a professional chef. "
        "Includes wine tasting and recipe booklet.",
        starts_at=_at("2024-02-15T18:00:00"),
        location="Culinary Arts Studio, Downtown",
        capacity=12,
        price_per_person=8500,
    ),
    NewEvent(
        title="Morning Yoga & Meditation",
        description="Start your day with gentle yoga flows and guided meditation. "
        "Suitable for all levels. Mats provided.",
        starts_at=_at("2024-02-10T07:00:00"),
        location="Zen Garden Studio",
        capacity=20,
        price_per_person=2500,
    ),
    NewEvent(
        title="Historic City Walking Tour",
        description="Explore the hidden gems and fascinating history of our city with a local "
        "expert guide. 2-hour guided tour.",
        starts_at=_at("2024-02-12T14:00:00"),
        location="City Hall Square (Meeting Point)",
        capacity=25,
        price_per_person=1800,
    ),
    NewEvent(
        title="Photography Workshop: Golden Hour",
        description="Master the art of golden hour photography. Learn composition, lighting, "
        "and editing techniques.",
        starts_at=_at("2024-02-18T17:30:00"),
        location="Riverside Park",
        capacity=8,
        price_per_person=7500,
    ),
    NewEvent(
        title="Wine & Cheese Tasting Evening",
        description="Sample premium wines paired with artisanal cheeses. Learn about wine "
        "regions and tasting notes.",
        starts_at=_at("2024-02-20T19:00:00"),
        location="The Wine Cellar",
        capacity=16,
        price_per_person=6500,
    ),
    NewEvent(
        title="Rock Climbing for Beginners",
        description="Introduction to indoor rock climbing with certified instructors. "
        "All equipment included.",
        starts_at=_at("2024-02-25T10:00:00"),
        location="Adventure Climbing Gym",
        capacity=10,
        price_per_person=4500,
    ),
    NewEvent(
        title="Pottery Making Workshop",
        description="Create your own ceramic masterpiece on the pottery wheel. Clay, tools, "
        "and firing included.",
        starts_at=_at("2024-03-02T13:00:00"),
        location="Clay Works Studio",
        capacity=6,
        price_per_person=5500,
    ),
    NewEvent(
        title="Salsa Dancing Lessons",
        description="Learn basic salsa steps and turns in a fun, social environment. "
        "No partner required!",
        starts_at=_at("2024-02-22T20:00:00"),
        location="Dance Fever Studio",
        capacity=30,
        price_per_person=2000,
    ),
    NewEvent(
        title="Urban Sketching Adventure",
        description="Explore the city while learning to sketch architecture and street scenes. "
        "Materials provided.",
        starts_at=_at("2024-02-28T11:00:00"),
        location="Arts District Plaza",
        capacity=15,
        price_per_person=3500,
    ),
    NewEvent(
        title="Craft Beer Brewing Workshop",
        description="Learn the brewing process and create your own craft beer recipe. "
        "Take home samples!",
        starts_at=_at("2024-03-05T15:00:00"),
        location="Local Brewery & Taphouse",
        capacity=12,
        price_per_person=9500,
    ),
]


async def seed_events(store: EventStore) -> int:
    """Replace every stored event with SAMPLE_EVENTS, returning how many were created."""
    cleared = await store.delete_all()
    logger.info("events_cleared", count=cleared)

    for fields in SAMPLE_EVENTS:
        event = await store.create(fields)
        logger.info(
            "event_seeded",
            event_id=str(event.id),
            title=event.title,
            price=format_price(event.price_per_person),
        )
    return len(SAMPLE_EVENTS)


async def main() -> None:
    setup_logging()
    async with AsyncSessionLocal() as session:
        async with session.begin():
            created = await seed_events(SqlAlchemyEventStore(session))
    await engine.dispose()
    logger.info("seeding_completed", created=created)


if __name__ == "__main__":
    asyncio.run(main())
