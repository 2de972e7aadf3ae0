"""Allow ``python -m xtf8``."""

from .cli import main

raise SystemExit(main())
