#!/usr/bin/env python3
"""Fill the multilingual maps of one content record from the command line.

Usage:
    python scripts/bulk_translate.py info_pages 42
    python scripts/bulk_translate.py deck_pages 7 title deck_name deck_description
"""

import argparse
import sys
import os

# Add parent directory to path to import app modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app
from app.services.bulk_translation import ALLOWED_TABLES, translate_record
from app.services.errors import TranslationError


def main(argv=None):
    parser = argparse.ArgumentParser(description='Bulk-translate one content record.')
    parser.add_argument('table', choices=sorted(ALLOWED_TABLES))
    parser.add_argument('id', type=int)
    parser.add_argument('fields', nargs='*', help='Fields to translate (default: title description)')
    args = parser.parse_args(argv)

    app = create_app(os.getenv('FLASK_ENV', 'development'))

    with app.app_context():
        try:
            result = translate_record(args.table, args.id, args.fields or None)
        except TranslationError as e:
            print(f"❌ {e}")
            return 1

    print(f"✅ {args.table}/{args.id}: {', '.join(result.fields_translated) or 'nothing to translate'}")
    print(f"   Languages: {result.languages_count}, status: {result.status}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
