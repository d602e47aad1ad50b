#!/usr/bin/env python3
"""
Check the database connection and print table structure.
Run with: python3 check_db.py
"""
import sys

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from clinic_records import create_app
from clinic_records.extensions import db


def main():
    try:
        app = create_app()
    except SQLAlchemyError as e:
        print(f"❌ Connection failed: {e}")
        print("💡 Check DATABASE_URL in your .env file")
        return 1

    with app.app_context():
        print("=" * 60)
        print(f"✅ Connected to {db.engine.url.render_as_string(hide_password=True)}")
        print("=" * 60)

        inspector = inspect(db.engine)
        tables = inspector.get_table_names()
        print(f"\nFound {len(tables)} table(s):")

        for table_name in tables:
            print(f"\n📋 Table: {table_name}")
            print("-" * 60)
            for col in inspector.get_columns(table_name):
                nullable = "NULL" if col['nullable'] else "NOT NULL"
                print(f"  • {col['name']:20} {str(col['type']):20} {nullable}")

            for constraint in inspector.get_unique_constraints(table_name):
                print(f"  unique {constraint['name']}: {', '.join(constraint['column_names'])}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
