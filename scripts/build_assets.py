#!/usr/bin/env python3
"""
Build the page bundles consumed by the portal templates.

Runs from a checkout without installing the package. Vendor sources are not
tracked; see ``app/cli.py`` for where they go.

Example:
    python scripts/build_assets.py --output portal-server/build/bundles
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SERVER_ROOT = REPO_ROOT / "portal-server"

if str(SERVER_ROOT) not in sys.path:
    sys.path.insert(0, str(SERVER_ROOT))

from app.cli import main  # noqa: E402


if __name__ == "__main__":
    main()
