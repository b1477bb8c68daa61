#!/usr/bin/env python3
"""Main entry point for standings."""

from standings.main import main

if __name__ == "__main__":
    main()
