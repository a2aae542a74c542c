"""Allow ``python -m tvrenamer``."""
import sys

from .cli import main

sys.exit(main())
