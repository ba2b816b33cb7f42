"""
Environment driven settings of the llm‑connector library.

Every value is read once at import time, so the deployment environment can
control the behaviour without code changes.
"""

import os


class _DontChangeMe:
    MAIN_ENV_PREFIX = "LLM_CONNECTOR_"


# Hard default of the OpenAI compatible API (used when neither the options
# nor the credentials define a base URL)
DEFAULT_BASE_URL = os.environ.get(
    f"{_DontChangeMe.MAIN_ENV_PREFIX}DEFAULT_BASE_URL", "https://api.openai.com/v1"
).strip()

# Default logging level
LOG_LEVEL = os.environ.get(f"{_DontChangeMe.MAIN_ENV_PREFIX}LOG_LEVEL", "INFO").strip()

# Timeout (seconds) of the models listing request
DISCOVERY_TIMEOUT = int(
    os.environ.get(f"{_DontChangeMe.MAIN_ENV_PREFIX}DISCOVERY_TIMEOUT", "10").strip()
)

# Number of retries of the models listing request
DISCOVERY_RETRIES = int(
    os.environ.get(f"{_DontChangeMe.MAIN_ENV_PREFIX}DISCOVERY_RETRIES", "2").strip()
)
