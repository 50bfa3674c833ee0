"""
Request boundary shared by the Flask app and the Lambda handler.

Every surface turns a raw request body into a (status, body) pair here, so
they agree on which failures are the caller's fault (400) and which are ours
(500).
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict, Tuple

from .models import IncentiveInput, InputError
from .processor import IncentiveProcessor

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An unexpected error occurred during processing"


def parse_body(body, is_base64: bool = False) -> Dict[str, Any]:
    """
    Decode a request body into a payload dict.

    Accepts a JSON string/bytes (optionally base64 encoded, as API Gateway
    sends binary bodies) or an already-decoded dict.
    """
    if isinstance(body, (str, bytes)):
        if is_base64 and body:
            try:
                body = base64.b64decode(body)
            except (binascii.Error, ValueError) as e:
                raise InputError(f"Invalid base64 body: {e}") from None
        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InputError(f"Invalid JSON: {e}") from None
        if not body.strip():
            raise InputError("No input data provided")
        try:
            body = json.loads(body)
        except json.JSONDecodeError as e:
            raise InputError(f"Invalid JSON: {e}") from None

    if not body:
        raise InputError("No input data provided")
    if not isinstance(body, dict):
        raise InputError("Request body must be a JSON object")
    return body


def handle_request(processor: IncentiveProcessor, body, is_base64: bool = False) -> Tuple[int, Dict[str, Any]]:
    """
    Run one overview request end to end.

    Returns:
        (status code, response dict). Bad input is 400 "validation_failed";
        anything else that goes wrong is 500 "failed" with a generic message.
    """
    try:
        input_data = IncentiveInput.from_dict(parse_body(body, is_base64))
        logger.info(f"Calculating incentives for user: {input_data.current_user.id}")

        result = processor.process(input_data)

        logger.info(f"Incentives calculated for {len(result['calculations'])} users")
        return 200, result

    except ValueError as e:
        logger.error(f"Validation error: {str(e)}")
        return 400, {"error": str(e), "status": "validation_failed"}

    except Exception as e:
        # Details stay in the logs
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return 500, {"error": GENERIC_ERROR, "status": "failed"}


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def calculate_incentives_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Calculate an incentive overview from Python dict and return Python dict.

    Raises ValueError for invalid input.
    """
    processor = IncentiveProcessor()
    return processor.process_from_dict(input_data)


def calculate_incentives_from_json(json_input: str) -> str:
    """
    Calculate an incentive overview from JSON string input and return JSON string output.

    Errors come back as the same JSON error bodies the HTTP surfaces return.
    """
    _, body = handle_request(IncentiveProcessor(), json_input)
    return json.dumps(body, indent=2)
