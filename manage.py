#!/usr/bin/env python
"""Entrypoint for Django management commands."""

import os
import sys


def main() -> None:
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "claimdesk.settings")
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Make sure the virtualenv is active and the project is installed."
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
