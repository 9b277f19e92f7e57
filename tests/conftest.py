"""Global test fixtures."""

import os

# Keep test runs independent from a developer's local config file
os.environ.pop("TASKHUB_CONFIG_FILE", None)
