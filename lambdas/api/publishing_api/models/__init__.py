"""Domain and request models."""

from .dataset_models import Dataset, DatasetInfo, S3Key, SourceType
from .request_models import (
    CreateDatasetRequest,
    CreateWidgetRequest,
    DuplicateWidgetsRequest,
    SetWidgetOrderRequest,
    UpdateWidgetRequest,
    WidgetOrderEntry,
)
from .widget_models import (
    WIDGET_VARIANTS,
    BaseWidget,
    ChartType,
    ChartWidget,
    ChartWidgetContent,
    TableWidget,
    TableWidgetContent,
    TextWidget,
    TextWidgetContent,
    Widget,
    WidgetType,
)

__all__ = [
    # Dataset models
    "Dataset",
    "DatasetInfo",
    "S3Key",
    "SourceType",
    # Widget models
    "BaseWidget",
    "ChartType",
    "ChartWidget",
    "ChartWidgetContent",
    "TableWidget",
    "TableWidgetContent",
    "TextWidget",
    "TextWidgetContent",
    "Widget",
    "WidgetType",
    "WIDGET_VARIANTS",
    # Request models
    "CreateDatasetRequest",
    "CreateWidgetRequest",
    "DuplicateWidgetsRequest",
    "SetWidgetOrderRequest",
    "UpdateWidgetRequest",
    "WidgetOrderEntry",
]
