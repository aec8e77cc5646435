"""Allow ``python -m serverless_cli``."""

from serverless_cli.cli import main

main()
