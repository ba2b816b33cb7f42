"""
Domain constants shared by the metadata normalizer and the request resolver.
"""

import re

from llm_connector_lib.base.constants_base import DEFAULT_BASE_URL

# Reserved metadata key holding custom metadata text that could not be parsed
RAW_METADATA_KEY = "_raw"

# Envelope key expected by the LiteLLM gateway inside ``extra_body``
EXTRA_BODY_METADATA_KEY = "metadata"

# Metadata keys populated from the session / user identifiers
SESSION_ID_KEY = "sessionId"
USER_ID_KEY = "userId"

# First node version that uses the resource locator ({mode, value}) selector
MODEL_LOCATOR_MIN_VERSION = 1.2

MODEL_LOCATOR_MODES = ["list", "id"]

# ----------------------------------------------------------------------
# Defaults applied only when the caller omitted the option
# ----------------------------------------------------------------------
DEFAULT_TIMEOUT_MS = 60000
DEFAULT_MAX_RETRIES = 2

# ----------------------------------------------------------------------
# Enumerated options
# ----------------------------------------------------------------------
RESPONSE_FORMAT_TEXT = "text"
RESPONSE_FORMAT_JSON = "json_object"
RESPONSE_FORMATS = [RESPONSE_FORMAT_TEXT, RESPONSE_FORMAT_JSON]

DEFAULT_REASONING_EFFORT = "medium"
REASONING_EFFORTS = ["low", "medium", "high"]

# reasoning_effort is accepted by o1 (and its dated versions, not o1-mini),
# o3 and later o-series models and the gpt-5 family
REASONING_MODEL_PATTERN = re.compile(r"(^o1([-\d]+)?$)|(^o[3-9].*)|(^gpt-5.*)")

# ----------------------------------------------------------------------
# Bounds of numeric options: name -> (min, max), ``None`` means unbounded
# ----------------------------------------------------------------------
MAX_TOKENS_LIMIT = 32768

OPTION_BOUNDS = {
    "frequency_penalty": (-2.0, 2.0),
    "presence_penalty": (-2.0, 2.0),
    "temperature": (0.0, 2.0),
    "top_p": (0.0, 1.0),
    "max_tokens": (None, MAX_TOKENS_LIMIT),
}

# ----------------------------------------------------------------------
# Model discovery
# ----------------------------------------------------------------------
OPENAI_API_HOST_PREFIX = "https://api.openai.com/"
CHAT_MODEL_PREFIXES = ["ft:", "o1", "o3"]
GPT_MODEL_PREFIX = "gpt-"
NON_CHAT_MARKER = "instruct"
