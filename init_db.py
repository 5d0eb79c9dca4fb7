#!/usr/bin/env python
"""Database initialization script.

This script creates all database tables based on the SQLAlchemy models.
Run this once before starting the application for the first time.

Usage:
    python init_db.py
"""

import os
import sys
from app import create_app, db


def init_database():
    """Initialize the database by creating all tables."""
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")

    with app.app_context():
        try:
            print("Creating database tables...")
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")

            db.create_all()

            print("✅ Database tables created successfully!\n")
            for table in db.metadata.sorted_tables:
                print(f"  - {table.name}")
            print()
        except Exception as e:
            print(f"❌ Error creating tables: {e}")
            sys.exit(1)


if __name__ == '__main__':
    init_database()
