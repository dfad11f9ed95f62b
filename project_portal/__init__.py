"""Project Portal: fuzzy-pick a project directory or create a new one."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
