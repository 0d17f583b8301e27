"""Allow ``python -m leftover_junk``."""

from .cli import main

raise SystemExit(main())
