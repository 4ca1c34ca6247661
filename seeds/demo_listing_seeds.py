# seeds/demo_listing_seeds.py
from sqlalchemy.orm import Session
from models import User, UserRole, Property
from auth.utils import hash_password

DEMO_PASSWORD = "UrbanRent2024!"

DEMO_USERS = [
    dict(name="Demo Tenant", email="tenant@urbanrent.test", phone="555-0101", role=UserRole.TENANT.value),
    dict(name="Demo Owner", email="owner@urbanrent.test", phone="555-0102", role=UserRole.PROPERTY_OWNER.value),
]

DEMO_LISTING = dict(
    property_name="Sunny 2BR near the park",
    price=1850.0,
    description="Bright two bedroom apartment, walking distance to transit.",
    property_type="apartment",
    bedrooms=2,
    bathrooms=1,
    max_guests=4,
)

def seed_demo_listings(session: Session) -> dict:
    """Create the demo tenant, owner and one listing if they are missing."""
    by_email = {u.email: u for u in session.query(User).filter(
        User.email.in_([row["email"] for row in DEMO_USERS])
    ).all()}

    for row in DEMO_USERS:
        if row["email"] in by_email:
            continue
        user = User(password_hash=hash_password(DEMO_PASSWORD), **row)
        session.add(user)
        by_email[row["email"]] = user
    session.flush()

    tenant = by_email["tenant@urbanrent.test"]
    owner = by_email["owner@urbanrent.test"]

    listing = session.query(Property).filter(
        Property.user_id == owner.user_id,
        Property.property_name == DEMO_LISTING["property_name"],
    ).first()
    if not listing:
        listing = Property(user_id=owner.user_id, **DEMO_LISTING)
        session.add(listing)

    session.commit()
    return {"tenant": tenant, "owner": owner, "listing": listing}
