# scripts/seed_data.py
import argparse
import requests

from canvas_api.db.base import Base
from canvas_api.db.session import SessionLocal, engine
from canvas_api.db.init_db import init_db
from canvas_api.core.logging import logger


def seed_database():
    """Seed the database with initial data"""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        init_db(db)
    finally:
        db.close()


def main():
    """Main entry point for the script"""
    parser = argparse.ArgumentParser(description='Seed database for Canvas API')
    parser.add_argument('--service-url', type=str, help='URL of the API service for testing')

    args = parser.parse_args()

    # Seed database
    logger.info("Seeding database...")
    seed_database()
    logger.info("Database seeded successfully.")

    # Test API if service URL provided
    if args.service_url:
        base_url = args.service_url.rstrip('/')

        # Try accessing the health check endpoint
        try:
            response = requests.get(f"{base_url}/health")
            if response.status_code == 200:
                logger.info(f"API health check successful: {response.json()}")
            else:
                logger.error(f"API health check failed: {response.status_code}, {response.text}")
        except requests.RequestException as e:
            logger.error(f"Error accessing API: {str(e)}")


if __name__ == "__main__":
    main()
