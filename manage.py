#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""
import os
import sys


def main():
    """Run administrative tasks."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "restaurant_ops.settings")

    from django.core.management import execute_from_command_line

    from restaurant_ops.logging import configure_logging

    configure_logging()
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
