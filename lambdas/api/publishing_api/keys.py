"""
Composite key codec for the single-table design.

Access patterns:
- Dataset:           PK=Dataset#{datasetId}     SK=Dataset#{datasetId}
- Dashboard widgets: PK=Dashboard#{dashboardId} SK=Widget#{widgetId}

All widgets of a dashboard share one partition key, so listing them is a
single query on PK with SK begins_with Widget#.
"""

from typing import NamedTuple

from .errors import MalformedKeyError

DATASET_PREFIX = "Dataset#"
DASHBOARD_PREFIX = "Dashboard#"
WIDGET_PREFIX = "Widget#"

DATASET_ITEM_TYPE = "Dataset"
WIDGET_ITEM_TYPE = "Widget"


class ItemKey(NamedTuple):
    pk: str
    sk: str


def dataset_key(dataset_id: str) -> ItemKey:
    key = f"{DATASET_PREFIX}{dataset_id}"
    return ItemKey(pk=key, sk=key)


def widget_partition_key(dashboard_id: str) -> str:
    return f"{DASHBOARD_PREFIX}{dashboard_id}"


def widget_sort_key(widget_id: str) -> str:
    return f"{WIDGET_PREFIX}{widget_id}"


def widget_key(dashboard_id: str, widget_id: str) -> ItemKey:
    return ItemKey(
        pk=widget_partition_key(dashboard_id), sk=widget_sort_key(widget_id)
    )


def _strip_prefix(key: str, prefix: str) -> str:
    if not isinstance(key, str) or not key.startswith(prefix):
        raise MalformedKeyError(key, prefix)
    return key[len(prefix) :]


def extract_dataset_id(key: str) -> str:
    return _strip_prefix(key, DATASET_PREFIX)


def extract_dashboard_id(pk: str) -> str:
    return _strip_prefix(pk, DASHBOARD_PREFIX)


def extract_widget_id(sk: str) -> str:
    return _strip_prefix(sk, WIDGET_PREFIX)
