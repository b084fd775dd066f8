"""Allow ``python -m seed <file>``."""

from seed.cli import main

main()
