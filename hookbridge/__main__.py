"""Allow running as `python -m hookbridge`."""

from hookbridge.cli import main

main()
