"""
PynamoDB models for the Dashboard Publishing API - Single Table Design.

All entities share one DynamoDB table with the following access patterns:
- Dataset:           PK=Dataset#{datasetId}     SK=Dataset#{datasetId}
- Dashboard widgets: PK=Dashboard#{dashboardId} SK=Widget#{widgetId}
"""

from pynamodb.attributes import MapAttribute, NumberAttribute, UnicodeAttribute
from pynamodb.models import Model

from .config import AWS_REGION, DASHBOARD_TABLE_NAME


class WidgetModel(Model):
    """
    Dashboard widget.

    Access Patterns:
    - Single widget: PK=Dashboard#{dashboardId}, SK=Widget#{widgetId}
    - Dashboard's widgets: Query PK=Dashboard#{dashboardId}, SK begins_with Widget#
    """

    class Meta:
        table_name = DASHBOARD_TABLE_NAME
        region = AWS_REGION

    # Primary keys
    pk = UnicodeAttribute(hash_key=True)  # Dashboard#{dashboardId}
    sk = UnicodeAttribute(range_key=True)  # Widget#{widgetId}

    type = UnicodeAttribute(default="Widget")
    name = UnicodeAttribute(null=True)
    widgetType = UnicodeAttribute(null=True)  # Text, Chart or Table
    order = NumberAttribute(null=True)
    updatedAt = UnicodeAttribute(null=True)
    content = MapAttribute(null=True)  # Variant payload stored as a raw map


class DatasetModel(Model):
    """
    Uploaded dataset.

    Access Pattern:
    - Single dataset: PK=SK=Dataset#{datasetId}
    """

    class Meta:
        table_name = DASHBOARD_TABLE_NAME
        region = AWS_REGION

    # Primary keys
    pk = UnicodeAttribute(hash_key=True)  # Dataset#{datasetId}
    sk = UnicodeAttribute(range_key=True)  # Dataset#{datasetId}

    type = UnicodeAttribute(default="Dataset")
    fileName = UnicodeAttribute(null=True)
    createdBy = UnicodeAttribute(null=True)
    s3Key = MapAttribute(null=True)  # {raw, json}
    updatedAt = UnicodeAttribute(null=True)
    sourceType = UnicodeAttribute(null=True)
