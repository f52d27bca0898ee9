"""Global pytest configuration."""

import os

# Keep tests independent of a developer's .env / shell
os.environ.pop("DATABASE_URL", None)
os.environ.setdefault("SUGGESTIONS_BASE_URL", "http://suggestions.test")
