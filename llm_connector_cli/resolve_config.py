"""
Request configuration command‑line interface.

This module provides a small command‑line utility that reads the inputs of
one chat model node from a JSON document (file or standard input), resolves
the outbound request configuration and writes it as JSON to a file (or
standard output).  The API key is masked in the output.

Input document::

    {
      "credentials": {"apiKey": "sk-...", "url": "http://litellm:4000/v1"},
      "options": {"temperature": 0.2, "reasoningEffort": "high"},
      "model": {"mode": "list", "value": "o3-mini"},
      "schema_version": 1.2,
      "metadata": {"sessionId": "s-1", "customMetadata": "{\\"env\\": \\"dev\\"}"}
    }

---

# Quick ways to run the script

>>> llm-connector-resolve node.json -o config.json

>>> cat node.json | llm-connector-resolve --diagnostics

Exit code ``2`` means the configuration could not be resolved.
"""

import argparse
import json
import sys
from typing import List, Optional

from llm_connector_lib import LiteLLMChatConnector, ConfigurationError
from llm_connector_lib.data_models.constants import MODEL_LOCATOR_MIN_VERSION
from llm_connector_lib.utils.logger import prepare_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve the chat completion request configuration of a node."
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=argparse.FileType("r", encoding="utf-8"),
        default=sys.stdin,
        help="Input JSON file (defaults to STDIN).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=argparse.FileType("w", encoding="utf-8"),
        default=sys.stdout,
        help="Output file (defaults to STDOUT).",
    )
    parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Include the resolution diagnostics in the output.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level of the resolver (default: WARNING).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = prepare_logger("llm_connector_cli", level=args.log_level)
    connector = LiteLLMChatConnector(logger=logger)

    try:
        document = json.load(args.input)
    except ValueError as exc:
        print(f"Input is not valid JSON: {exc}", file=sys.stderr)
        return 2
    if not isinstance(document, dict):
        print("Input must be a JSON object", file=sys.stderr)
        return 2

    try:
        config = connector.build_config(
            credentials=document.get("credentials") or {},
            options=document.get("options"),
            model=document.get("model"),
            schema_version=document.get("schema_version", MODEL_LOCATOR_MIN_VERSION),
            metadata=document.get("metadata"),
        )
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    payload = config.to_payload(mask_api_key=True, with_diagnostics=args.diagnostics)
    json.dump(payload, args.output, indent=2, ensure_ascii=False)
    args.output.write("\n")
    if args.output is not sys.stdout:
        args.output.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
