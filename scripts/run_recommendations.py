#!/usr/bin/env python3
"""One-off recommendation run.

Ranks jobs for every profile (or one user) and prints the result as JSON.

Usage:
    python scripts/run_recommendations.py [--user USER_ID] [--top-n 5]

Environment variables:
    DATABASE_URL: SQLAlchemy connection string
    EMBEDDING_API_URL: Feature-extraction endpoint (optional)
    EMBEDDING_API_TOKEN: Bearer token for the endpoint (optional)
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from recommender.main import main

if __name__ == "__main__":
    sys.exit(main())
