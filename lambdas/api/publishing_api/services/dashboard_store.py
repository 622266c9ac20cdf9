"""
Single-table storage for widget and dataset items.

Items cross this module as plain dicts in the shape produced by the
factories' ``to_item``; PynamoDB models are an internal detail.
"""

from typing import Any, Dict, Iterable, List, Optional

from aws_lambda_powertools import Logger, Tracer
from pynamodb.attributes import MapAttribute
from pynamodb.exceptions import DoesNotExist

from ..config import LOG_LEVEL
from ..db_models import DatasetModel, WidgetModel
from ..keys import WIDGET_PREFIX, dataset_key, widget_key, widget_partition_key

logger = Logger(service="dashboard-store", level=LOG_LEVEL)
tracer = Tracer(service="dashboard-store")

WIDGET_ATTRIBUTES = ("type", "name", "widgetType", "order", "updatedAt", "content")
DATASET_ATTRIBUTES = (
    "type",
    "fileName",
    "createdBy",
    "s3Key",
    "updatedAt",
    "sourceType",
)


def _to_model(model_class, item: Dict[str, Any], attributes: Iterable[str]):
    values = {name: item[name] for name in attributes if item.get(name) is not None}
    return model_class(item["pk"], item["sk"], **values)


def _to_item(model, attributes: Iterable[str]) -> Dict[str, Any]:
    item = {"pk": model.pk, "sk": model.sk}
    for name in attributes:
        value = getattr(model, name)
        if value is None:
            continue
        if isinstance(value, MapAttribute):
            value = value.as_dict()
        item[name] = value
    return item


@tracer.capture_method
def put_widget_item(item: Dict[str, Any]) -> None:
    _to_model(WidgetModel, item, WIDGET_ATTRIBUTES).save()


@tracer.capture_method
def put_widget_items(items: List[Dict[str, Any]]) -> None:
    """Write several widget items in one batch."""
    with WidgetModel.batch_write() as batch:
        for item in items:
            batch.save(_to_model(WidgetModel, item, WIDGET_ATTRIBUTES))
    logger.info("Batch wrote widget items", extra={"item_count": len(items)})


@tracer.capture_method
def get_widget_item(dashboard_id: str, widget_id: str) -> Optional[Dict[str, Any]]:
    key = widget_key(dashboard_id, widget_id)
    try:
        return _to_item(WidgetModel.get(key.pk, key.sk), WIDGET_ATTRIBUTES)
    except DoesNotExist:
        return None


@tracer.capture_method
def query_widget_items(dashboard_id: str) -> List[Dict[str, Any]]:
    """Get every widget item stored under the dashboard's partition."""
    results = WidgetModel.query(
        widget_partition_key(dashboard_id),
        WidgetModel.sk.startswith(WIDGET_PREFIX),
    )
    return [_to_item(model, WIDGET_ATTRIBUTES) for model in results]


@tracer.capture_method
def delete_widget_item(dashboard_id: str, widget_id: str) -> bool:
    """Delete a widget item; returns False when it does not exist."""
    key = widget_key(dashboard_id, widget_id)
    try:
        model = WidgetModel.get(key.pk, key.sk)
    except DoesNotExist:
        return False
    model.delete()
    return True


@tracer.capture_method
def put_dataset_item(item: Dict[str, Any]) -> None:
    _to_model(DatasetModel, item, DATASET_ATTRIBUTES).save()


@tracer.capture_method
def get_dataset_item(dataset_id: str) -> Optional[Dict[str, Any]]:
    key = dataset_key(dataset_id)
    try:
        return _to_item(DatasetModel.get(key.pk, key.sk), DATASET_ATTRIBUTES)
    except DoesNotExist:
        return None
