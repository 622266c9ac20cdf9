"""
Caller identity for API Gateway requests authorized by Cognito.

Authentication itself happens upstream; this module only reads the claims
the authorizer attached to the event.
"""

import json
from typing import Any, Dict, Optional

from aws_lambda_powertools import Logger

from .config import LOG_LEVEL

logger = Logger(service="user-auth", level=LOG_LEVEL)


def extract_user_context(event: Dict[str, Any]) -> Dict[str, Optional[str]]:
    """
    Extract user information from the JWT claims in the event context.

    Returns:
        Dictionary with user_id and username, or None values if not found
    """
    request_context = event.get("requestContext")
    if not isinstance(request_context, dict):
        return {"user_id": None, "username": None}

    authorizer = request_context.get("authorizer")
    if not isinstance(authorizer, dict):
        return {"user_id": None, "username": None}

    claims = authorizer.get("claims")

    # Handle claims as either dict or JSON string
    if isinstance(claims, str):
        try:
            claims = json.loads(claims)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(
                {
                    "message": "Failed to parse claims JSON string",
                    "error": str(e),
                    "operation": "extract_user_context",
                }
            )
            return {"user_id": None, "username": None}

    if not isinstance(claims, dict):
        logger.debug(
            {
                "message": "Claims is neither dict nor string",
                "claims_type": type(claims).__name__,
                "operation": "extract_user_context",
            }
        )
        return {"user_id": None, "username": None}

    return {
        "user_id": claims.get("sub"),
        "username": claims.get("cognito:username"),
    }
