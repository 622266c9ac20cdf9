"""
Widget domain models.

A widget is one of three variants sharing identity and ordering fields:
TextWidget, ChartWidget and TableWidget. The ``widgetType`` field is the
discriminator of the ``Widget`` union.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .dataset_models import S3Key


class WidgetType(str, Enum):
    """Widget variant tags."""

    TEXT = "Text"
    CHART = "Chart"
    TABLE = "Table"


class ChartType(str, Enum):
    """Chart kinds a chart widget can render."""

    LINE_CHART = "LineChart"
    COLUMN_CHART = "ColumnChart"
    BAR_CHART = "BarChart"
    PART_WHOLE_CHART = "PartWholeChart"


# Content models keep undeclared keys read from stored items so they are
# written back unchanged; the create path only passes declared fields.
class TextWidgetContent(BaseModel):
    text: str

    model_config = ConfigDict(frozen=True, extra="allow")


class ChartWidgetContent(BaseModel):
    title: str
    chartType: ChartType
    datasetId: str
    summary: Optional[str] = None
    s3Key: S3Key
    fileName: str
    datasetType: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="allow")


class TableWidgetContent(BaseModel):
    title: str
    datasetId: str
    summary: Optional[str] = None
    s3Key: S3Key
    fileName: str
    datasetType: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="allow")


class BaseWidget(BaseModel):
    """Fields common to every widget variant."""

    id: str = Field(..., description="Widget ID")
    dashboardId: str = Field(..., description="Owning dashboard ID")
    name: str = Field(..., description="Display label")
    order: int = Field(default=0, description="Position within the dashboard")
    updatedAt: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(frozen=True)


class TextWidget(BaseWidget):
    widgetType: Literal[WidgetType.TEXT] = WidgetType.TEXT
    content: TextWidgetContent


class ChartWidget(BaseWidget):
    widgetType: Literal[WidgetType.CHART] = WidgetType.CHART
    content: ChartWidgetContent


class TableWidget(BaseWidget):
    widgetType: Literal[WidgetType.TABLE] = WidgetType.TABLE
    content: TableWidgetContent


Widget = Annotated[
    Union[TextWidget, ChartWidget, TableWidget], Field(discriminator="widgetType")
]

# Variant model and content model per tag
WIDGET_VARIANTS = {
    WidgetType.TEXT: (TextWidget, TextWidgetContent),
    WidgetType.CHART: (ChartWidget, ChartWidgetContent),
    WidgetType.TABLE: (TableWidget, TableWidgetContent),
}
