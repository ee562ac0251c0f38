"""Allow ``python -m src.cli`` execution."""

from src.cli.tokens import main

raise SystemExit(main())
