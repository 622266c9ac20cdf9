"""Response envelopes and error mapping shared by the route handlers."""

import json
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

from aws_lambda_powertools import Logger, Metrics
from aws_lambda_powertools.event_handler import Response, content_types
from aws_lambda_powertools.metrics import MetricUnit
from pydantic import ValidationError as PydanticValidationError
from pynamodb.exceptions import PynamoDBException

from ..config import LOG_LEVEL, METRICS_NAMESPACE
from ..errors import (
    InvalidWidgetTypeError,
    MalformedItemError,
    MalformedKeyError,
    WidgetValidationError,
)

logger = Logger(service="dashboard-responses", level=LOG_LEVEL)
metrics = Metrics(namespace=METRICS_NAMESPACE, service="dashboard")


def _json_response(status_code: int, body: Dict[str, Any]) -> Response:
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(body, default=str),
    )


def success_response(data: Any, status_code: int = 200) -> Response:
    return _json_response(status_code, {"success": True, "data": data})


def error_response(
    status_code: int, code: str, message: str, details: Optional[List] = None
) -> Response:
    error = {"code": code, "message": message}
    if details:
        error["details"] = details
    return _json_response(status_code, {"success": False, "error": error})


def validation_error_response(errors: List[Dict[str, str]]) -> Response:
    return error_response(400, "VALIDATION_ERROR", "Request validation failed", errors)


def map_errors(operation: str) -> Callable:
    """
    Convert exceptions raised by a route into error envelopes.

    - request or widget content validation -> 400 VALIDATION_ERROR
    - malformed stored key                 -> 500 MALFORMED_KEY
    - malformed stored attribute           -> 500 MALFORMED_ITEM
    - DynamoDB failure                     -> 500 DATABASE_ERROR
    - anything else                        -> 500 INTERNAL_ERROR
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except PydanticValidationError as e:
                logger.warning(f"Request validation error: {e}")
                metrics.add_metric(
                    name="ValidationErrors", unit=MetricUnit.Count, value=1
                )
                return validation_error_response(
                    [
                        {
                            "field": ".".join(str(part) for part in err["loc"]),
                            "message": err["msg"],
                        }
                        for err in e.errors()
                    ]
                )
            except WidgetValidationError as e:
                logger.warning(
                    "Widget content validation failed",
                    extra={"field": e.field, "operation": operation},
                )
                metrics.add_metric(
                    name="ValidationErrors", unit=MetricUnit.Count, value=1
                )
                return validation_error_response(
                    [{"field": e.field, "message": e.message}]
                )
            except InvalidWidgetTypeError as e:
                logger.warning(str(e), extra={"operation": operation})
                metrics.add_metric(
                    name="ValidationErrors", unit=MetricUnit.Count, value=1
                )
                return validation_error_response(
                    [{"field": "widgetType", "message": str(e)}]
                )
            except MalformedKeyError as e:
                logger.exception(
                    f"Malformed key while {operation}",
                    extra={"key": e.key, "expected_prefix": e.expected_prefix},
                )
                return error_response(500, "MALFORMED_KEY", "Stored item is malformed")
            except MalformedItemError as e:
                logger.exception(
                    f"Malformed item while {operation}",
                    extra={"attribute": e.attribute},
                )
                return error_response(500, "MALFORMED_ITEM", "Stored item is malformed")
            except PynamoDBException as e:
                logger.exception(f"DynamoDB error while {operation}", exc_info=e)
                return error_response(500, "DATABASE_ERROR", f"Failed {operation}")
            except Exception as e:
                logger.exception(f"Error while {operation}", exc_info=e)
                metrics.add_metric(
                    name="UnexpectedErrors", unit=MetricUnit.Count, value=1
                )
                return error_response(500, "INTERNAL_ERROR", f"Failed {operation}")

        return wrapper

    return decorator
