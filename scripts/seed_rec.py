#!/usr/bin/env python3
"""
Seed the entity hierarchy from a REC input file (space;building;sensor).
Uses DATABASE_URL or the database settings in config/api_rec_config.json.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config_loader import config_loader
from core.db.database import database
from core.services.seeder import seed_file

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input", nargs="?", default=config_loader.get_rec_input_file(),
                        help="file containing a known REC structure")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    if not Path(args.input).exists():
        print(f"✗ Input file not found: {args.input}")
        sys.exit(1)

    count = seed_file(args.input)
    database.dispose()

    print(f"✓ Seeded {count} sensor(s) from {args.input}")
