"""
Seed a demo marketplace: one verified provider with a few services, one
customer, and a booking in each state.

    python scripts/seed_demo.py
"""
from sqlmodel import Session, select

from appointme import crud
from appointme.booking_models import Service, ServiceAvailability
from appointme.core.db import engine, init_db
from appointme.core.logging import get_logger
from appointme.models import User, UserRegister
from appointme.workflows import bookings

logger = get_logger("appointme.seed")

DEMO_PASSWORD = "demopassword"

DEMO_SERVICES = [
    ("Home Cleaning", "Deep cleaning of a two bedroom flat", 1500.0),
    ("AC Servicing", "Filter cleaning and gas check", 1200.0),
    ("Plumbing", "Pipe and tap repairs", 800.0),
]


def _get_or_create_user(session: Session, name: str, email: str, verified: bool) -> User:
    user = session.exec(select(User).where(User.email == email)).first()
    if user:
        return user
    user = crud.create_user(
        session=session,
        user_create=UserRegister(name=name, email=email, password=DEMO_PASSWORD),
    )
    if verified:
        user.is_verified = True
        user.application_status = "approved"
        session.add(user)
        session.commit()
        session.refresh(user)
    return user


def seed_demo() -> None:
    with Session(engine) as session:
        init_db(session)

        provider = _get_or_create_user(session, "Rahim Provider", "provider@appointme.com", True)
        customer = _get_or_create_user(session, "Karima Customer", "customer@appointme.com", False)

        existing = session.exec(select(Service).where(Service.user_id == provider.id)).all()
        if existing:
            print(f"Provider {provider.email} already has {len(existing)} services, skipping.")
            return

        services = []
        for name, description, price in DEMO_SERVICES:
            service = Service(user_id=provider.id, name=name, description=description, price=price)
            session.add(service)
            session.flush()
            session.add(ServiceAvailability(service_id=service.id, is_booked=False))
            services.append(service)
        session.commit()
        service_ids = [s.id for s in services]

        pending = bookings.create_booking(session, service_ids[0], customer.id, "Saturday 10:00 AM")
        confirmed = bookings.create_booking(session, service_ids[1], customer.id, "Sunday 2:00 PM")
        bookings.confirm_booking(session, confirmed.id)
        completed = bookings.create_booking(session, service_ids[2], customer.id, "Monday 9:00 AM")
        bookings.confirm_booking(session, completed.id)
        bookings.complete_booking(session, completed.id)

        logger.info({
            "event_type": "seed",
            "event_name": "demo_seeded",
            "provider_id": provider.id,
            "customer_id": customer.id,
            "booking_ids": [pending.id, confirmed.id, completed.id],
        })
        print(f"Seeded provider {provider.email} and customer {customer.email} "
              f"(password: {DEMO_PASSWORD})")


if __name__ == "__main__":
    seed_demo()
