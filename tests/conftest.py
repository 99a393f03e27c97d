"""Global test fixtures."""

import os

import logfire

# Keep a developer's config file out of Config() in tests
os.environ.pop("NETACCESS_CONFIG_FILE", None)

# Spans are created but never exported
logfire.configure(send_to_logfire=False, console=False)
