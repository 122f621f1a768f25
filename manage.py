#!/usr/bin/env python
"""Command-line entry point for the bus search service."""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Provider gateway URL, cache and log settings may come from .env
load_dotenv(Path(__file__).resolve().parent / ".env")

from django.core.management import execute_from_command_line


def main() -> None:
    """Run administrative tasks such as runserver or check."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core.settings.development")
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
