#!/usr/bin/env python3
"""
Launch the Traverse Tool CLI
Usage:
    python run_cli.py kml --data-dir ./data -o ./output
    python run_cli.py validate --data-dir ./data
    python run_cli.py geojson --data-dir ./data -o ./output
"""
import sys

from traverse_tool.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
