#!/usr/bin/env python3
"""
Cittadinanza Check - Main Entry Point

Usage:
    python run.py serve [--host HOST] [--port PORT] [--config YAML] [--debug/--no-debug]
    python run.py check FILES... [--config YAML] [--export-dir DIR] [--all-flags] [--breakdown]
    python run.py rules

Examples:
    # Open the form in a browser
    python run.py serve
    python run.py serve --port 8080 --config profiles/example.yaml

    # Pre-screen a folder of scans without the browser
    python run.py check ~/dossier/*.pdf --config profiles/example.yaml
    python run.py -v check ~/dossier/* -o summaries/ --breakdown

    # How file names are recognized
    python run.py rules
"""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from cittadinanza.cli import main


if __name__ == "__main__":
    main()
