"""Default accounts and categories seeded into empty workspaces."""

import json
from typing import List

from config import get_seed_dir


def load_defaults(kind: str) -> List[dict]:
    """Load the default documents of one kind from ``db/seed/defaults.json``.

    Args:
        kind: "accounts" or "categories".

    Returns:
        List of dicts, each with a stable ``key`` used to build document ids.
    """
    with open(get_seed_dir() / "defaults.json", "r") as f:
        data = json.load(f)
    return data.get(kind, [])
