"""EventBridge event publishing utilities."""

import json
from datetime import datetime, timezone
from typing import Any, Dict

import boto3
from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from .config import EVENT_BUS_NAME, EVENT_SOURCE, LOG_LEVEL

logger = Logger(service="dashboard-events", level=LOG_LEVEL)

_eventbridge_client = None


def _get_eventbridge_client():
    """Get or create EventBridge client."""
    global _eventbridge_client
    if _eventbridge_client is None:
        _eventbridge_client = boto3.client("events")
    return _eventbridge_client


def _publish_event(detail_type: str, detail: Dict[str, Any]) -> bool:
    """Publish event to EventBridge; failures are logged, never raised."""
    try:
        client = _get_eventbridge_client()

        detail["timestamp"] = datetime.now(timezone.utc).isoformat()

        client.put_events(
            Entries=[
                {
                    "Source": EVENT_SOURCE,
                    "DetailType": detail_type,
                    "Detail": json.dumps(detail),
                    "EventBusName": EVENT_BUS_NAME,
                }
            ]
        )
        logger.info(f"Published event: {detail_type}")
        return True
    except (BotoCoreError, ClientError) as e:
        logger.warning(f"Failed to publish event: {e}")
        return False


def publish_widget_created(dashboard_id: str, widget_id: str, widget_type: str) -> bool:
    """Publish WidgetCreated event."""
    return _publish_event(
        detail_type="WidgetCreated",
        detail={
            "dashboardId": dashboard_id,
            "widgetId": widget_id,
            "widgetType": widget_type,
        },
    )


def publish_widget_deleted(dashboard_id: str, widget_id: str) -> bool:
    """Publish WidgetDeleted event."""
    return _publish_event(
        detail_type="WidgetDeleted",
        detail={"dashboardId": dashboard_id, "widgetId": widget_id},
    )


def publish_widgets_reordered(dashboard_id: str, widget_count: int) -> bool:
    """Publish WidgetsReordered event."""
    return _publish_event(
        detail_type="WidgetsReordered",
        detail={"dashboardId": dashboard_id, "widgetCount": widget_count},
    )


def publish_dashboard_duplicated(
    source_dashboard_id: str, target_dashboard_id: str, widget_count: int
) -> bool:
    """Publish DashboardDuplicated event."""
    return _publish_event(
        detail_type="DashboardDuplicated",
        detail={
            "sourceDashboardId": source_dashboard_id,
            "dashboardId": target_dashboard_id,
            "widgetCount": widget_count,
        },
    )


def publish_dataset_created(dataset_id: str, created_by: str) -> bool:
    """Publish DatasetCreated event."""
    return _publish_event(
        detail_type="DatasetCreated",
        detail={"datasetId": dataset_id, "createdBy": created_by},
    )
