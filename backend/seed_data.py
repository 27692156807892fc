#!/usr/bin/env python3
"""Seed script to populate the database with sample destinations."""

import argparse
import logging

from app.core.database import SessionLocal, init_db
from app.auth.jwt_manager import jwt_manager
from app.repositories.sql import SqlDestinationRepository
from app.services.destination_service import DestinationService

SAMPLE_DESTINATIONS = [
    {"name": "Kyoto, Japan", "latitude": 35.0116, "longitude": 135.7681},
    {"name": "Paris, France", "latitude": 48.8566, "longitude": 2.3522},
    {"name": "Tokyo, Japan", "latitude": 35.6762, "longitude": 139.6503},
]


def create_sample_data(user_id: int):
    """Create sample destinations owned by ``user_id``."""
    init_db()
    db = SessionLocal()

    try:
        service = DestinationService(SqlDestinationRepository(db))
        created = [service.create_destination(user_id, data) for data in SAMPLE_DESTINATIONS]

        print("Sample data created successfully!")
        print(f"Created {len(created)} destinations for user {user_id}")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Seed sample destinations")
    parser.add_argument("--user-id", type=int, default=1, help="Owner of the sample destinations")
    parser.add_argument("--no-seed", action="store_true", help="Only print an access token")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    if not args.no_seed:
        create_sample_data(args.user_id)

    # Only valid against the server when a shared HS* secret or PEM keys are configured
    print(f"Access token for user {args.user_id}:")
    print(jwt_manager.create_access_token(args.user_id))


if __name__ == "__main__":
    main()
