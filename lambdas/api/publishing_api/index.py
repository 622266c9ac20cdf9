"""
Dashboard Publishing API Lambda Handler.

This is the main entry point for the Dashboard Publishing API Lambda function.
It uses AWS Lambda Powertools APIGatewayRestResolver for routing widget and
dataset endpoints to their respective handlers:
- handlers/widget_handlers.py: widget CRUD, reorder and duplicate
- handlers/dataset_handlers.py: dataset create and get

Dashboard listing, versioning and publish-state transitions are served by a
separate function.
"""

import json
from typing import Any, Dict

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from .config import AWS_REGION, DASHBOARD_TABLE_NAME, LOG_LEVEL, METRICS_NAMESPACE
from .db_models import DatasetModel, WidgetModel
from .handlers import register_all_routes

# Initialize PowerTools
logger = Logger(service="publishing-api", level=LOG_LEVEL)
tracer = Tracer(service="publishing-api")
metrics = Metrics(namespace=METRICS_NAMESPACE, service="publishing-api")

# Configure CORS
cors_config = CORSConfig(
    allow_origin="*",
    allow_headers=[
        "Content-Type",
        "X-Amz-Date",
        "Authorization",
        "X-Api-Key",
        "X-Amz-Security-Token",
    ],
    expose_headers=["X-Request-Id"],
    max_age=300,
)

# Initialize API Gateway resolver with CORS
app = APIGatewayRestResolver(
    serializer=lambda x: json.dumps(x, default=str),
    strip_prefixes=["/api"],
    cors=cors_config,
)


def bind_models(table_name: str, region: str) -> None:
    """Set table name and region for every model on the shared table."""
    for model in (WidgetModel, DatasetModel):
        model.Meta.table_name = table_name
        model.Meta.region = region

    logger.info(
        "PynamoDB models bound",
        extra={"table_name": table_name, "region": region},
    )


bind_models(DASHBOARD_TABLE_NAME, AWS_REGION)

register_all_routes(app)


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler for the Dashboard Publishing API.

    Args:
        event: API Gateway Lambda proxy integration event
        context: Lambda context object

    Returns:
        API Gateway Lambda proxy integration response
    """
    logger.info(
        "Dashboard Publishing API Lambda invoked",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "resource": event.get("resource"),
        },
    )

    try:
        return app.resolve(event, context)
    except Exception as e:
        logger.exception("Unhandled exception in Dashboard Publishing API", exc_info=e)
        return {
            "statusCode": 500,
            "body": json.dumps(
                {
                    "success": False,
                    "error": {
                        "code": "INTERNAL_ERROR",
                        "message": "An unexpected error occurred",
                        "details": [
                            {
                                "requestId": event.get("requestContext", {}).get(
                                    "requestId"
                                )
                            }
                        ],
                    },
                }
            ),
        }
