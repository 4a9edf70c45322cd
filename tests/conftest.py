"""Test configuration."""

import logfire

# The app module instruments FastAPI on import; configure Logfire first so
# spans go nowhere instead of warning about a missing configuration.
logfire.configure(send_to_logfire=False, console=False)
