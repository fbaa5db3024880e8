"""
CLI entry point for the geohash-index command.

This provides a command-line interface over the geohash codec,
adjacency and coverage functions.
"""
from geohash_index.runner import main

# Re-export main for the console_scripts entry point
__all__ = ['main']

if __name__ == '__main__':
    raise SystemExit(main())
