#!/usr/bin/env python3
"""Reset script for Tally.

This script will:
1. Delete the data directory (database, logs and local state)
2. Run migrations to create a fresh database
"""

import shutil
import sys

from config import get_config_path, load_config
from db.manager import DatabaseManager


def reset():
    """Reset the application state."""
    print("Tally Reset Script")
    print("=" * 50)

    config = load_config()

    if not config.enable_reset:
        print("\nReset is disabled in configuration (enable_reset=false).")
        print(f"To enable reset, set enable_reset=true in {get_config_path()}")
        sys.exit(1)

    print(f"\nData directory: {config.base_dir}")
    print(f"Database: {config.db_path}")
    print(f"Logs: {config.log_dir}")
    print(f"Local state: {config.state_file}")

    response = input("\nThis will delete ALL data. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    if config.base_dir.exists():
        print(f"\nDeleting {config.base_dir}...")
        shutil.rmtree(config.base_dir)
        print("✓ Data directory deleted")
    else:
        print(f"\n✓ Data directory does not exist: {config.base_dir}")

    # The state file may live outside base_dir
    if config.state_file.exists():
        config.state_file.unlink()
        print("✓ Local state deleted")

    print("\nRunning migrations...")
    db_manager = DatabaseManager(config)
    applied = db_manager.ensure_schema()
    print(f"✓ Applied {len(applied)} migration(s)")

    print("\n" + "=" * 50)
    print("Reset complete! Database has been recreated.")
    print(f"Database location: {config.db_path}")


if __name__ == "__main__":
    reset()
