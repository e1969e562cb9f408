#!/usr/bin/env python3
"""
CLI script to generate a vtxo tree and print branch statistics.

Usage:
    python bin/arktree.py generate 5
    python bin/arktree.py generate 64 --seed 7 --output output/stats.json
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from arktree.cli.main import main


if __name__ == "__main__":
    sys.exit(main())
