#!/usr/bin/env python3
import os
import sys
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:
    print("ERROR: DATABASE_URL not found in .env")
    sys.exit(1)

from db import init_db, SessionLocal, dispose_db
from auth.token import create_user_token
from seeds.demo_listing_seeds import seed_demo_listings, DEMO_PASSWORD

init_db(DATABASE_URL)

print("=== Seeding Demo Accounts ===\n")

with SessionLocal() as session:
    seeded = seed_demo_listings(session)
    tenant, owner, listing = seeded["tenant"], seeded["owner"], seeded["listing"]

    print(f"✅ Tenant:  {tenant.email} (user_id={tenant.user_id})")
    print(f"✅ Owner:   {owner.email} (user_id={owner.user_id})")
    print(f"✅ Listing: {listing.property_name} (property_id={listing.property_id})")

    print("\n" + "="*50)
    print("DEMO CREDENTIALS:")
    print("="*50)
    print(f"Password (both accounts): {DEMO_PASSWORD}")
    print(f"\nTenant bearer token:\n{create_user_token(tenant)}")
    print(f"\nOwner bearer token:\n{create_user_token(owner)}")
    print("="*50)
    print("\nStart a thread with:")
    print(f'  POST /api/messages/start  {{"receiver_id": {owner.user_id}, "property_id": {listing.property_id}, "content": "Is this available?"}}')

dispose_db()
