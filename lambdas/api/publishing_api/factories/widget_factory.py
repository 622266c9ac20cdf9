"""
Widget construction and item mapping.

New widgets are only built through ``create_widget`` (or the per-variant
constructors), which validate content before a typed widget exists. Widgets
read back from the table are trusted and narrowed by their ``widgetType``
tag without re-validation.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from aws_lambda_powertools import Logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..config import LOG_LEVEL
from ..errors import (
    InvalidWidgetTypeError,
    MalformedItemError,
    WidgetValidationError,
)
from ..keys import (
    WIDGET_ITEM_TYPE,
    extract_dashboard_id,
    extract_widget_id,
    widget_key,
)
from ..models import (
    WIDGET_VARIANTS,
    ChartType,
    ChartWidget,
    ChartWidgetContent,
    S3Key,
    TableWidget,
    TableWidgetContent,
    TextWidget,
    TextWidgetContent,
    Widget,
    WidgetType,
)
from .factory_utils import (
    Clock,
    IdFactory,
    new_id,
    parse_iso,
    require_field,
    to_iso,
    utc_now,
)

logger = Logger(service="widget-factory", level=LOG_LEVEL)

_CHART_TYPES = {chart_type.value for chart_type in ChartType}


def create_widget(
    name: str,
    dashboard_id: str,
    widget_type,
    content: Any,
    widget_id: Optional[str] = None,
    id_factory: IdFactory = new_id,
    clock: Clock = utc_now,
) -> Widget:
    """
    Create a new widget of the variant named by ``widget_type``.

    Args:
        name: Display label
        dashboard_id: Owning dashboard ID
        widget_type: WidgetType or its string value (Text, Chart, Table)
        content: Untyped content payload from the request
        widget_id: Existing ID to reuse; a new one is generated when omitted

    Raises:
        InvalidWidgetTypeError: widget_type is not a known variant
        WidgetValidationError: a required content field is missing or invalid
    """
    tag = _widget_type(widget_type)
    widget_id = widget_id or id_factory()

    if tag is WidgetType.TEXT:
        return create_text_widget(widget_id, name, dashboard_id, content, clock)
    if tag is WidgetType.CHART:
        return create_chart_widget(widget_id, name, dashboard_id, content, clock)
    return create_table_widget(widget_id, name, dashboard_id, content, clock)


def create_text_widget(
    widget_id: str,
    name: str,
    dashboard_id: str,
    content: Any,
    clock: Clock = utc_now,
) -> TextWidget:
    content = _content_mapping(content)
    text = require_field(content, "text", "Text")

    return _build(
        TextWidget,
        "Text",
        id=widget_id,
        name=name,
        dashboardId=dashboard_id,
        order=0,
        updatedAt=clock(),
        content=_build(TextWidgetContent, "Text", text=text),
    )


def create_chart_widget(
    widget_id: str,
    name: str,
    dashboard_id: str,
    content: Any,
    clock: Clock = utc_now,
) -> ChartWidget:
    content = _content_mapping(content)
    title = require_field(content, "title", "Chart")
    chart_type = require_field(content, "chartType", "Chart")
    try:
        chart_type = ChartType(chart_type)
    except (ValueError, TypeError):
        raise WidgetValidationError(
            "chartType", f"Invalid chart type '{chart_type}'"
        ) from None
    dataset_id = require_field(content, "datasetId", "Chart")
    s3_key = _s3_key(require_field(content, "s3Key", "Chart"), "Chart")
    file_name = require_field(content, "fileName", "Chart")

    return _build(
        ChartWidget,
        "Chart",
        id=widget_id,
        name=name,
        dashboardId=dashboard_id,
        order=0,
        updatedAt=clock(),
        content=_build(
            ChartWidgetContent,
            "Chart",
            title=title,
            chartType=chart_type,
            datasetId=dataset_id,
            summary=content.get("summary"),
            s3Key=s3_key,
            fileName=file_name,
            datasetType=content.get("datasetType"),
        ),
    )


def create_table_widget(
    widget_id: str,
    name: str,
    dashboard_id: str,
    content: Any,
    clock: Clock = utc_now,
) -> TableWidget:
    content = _content_mapping(content)
    title = require_field(content, "title", "Table")
    dataset_id = require_field(content, "datasetId", "Table")
    s3_key = _s3_key(require_field(content, "s3Key", "Table"), "Table")
    file_name = require_field(content, "fileName", "Table")

    return _build(
        TableWidget,
        "Table",
        id=widget_id,
        name=name,
        dashboardId=dashboard_id,
        order=0,
        updatedAt=clock(),
        content=_build(
            TableWidgetContent,
            "Table",
            title=title,
            datasetId=dataset_id,
            summary=content.get("summary"),
            s3Key=s3_key,
            fileName=file_name,
            datasetType=content.get("datasetType"),
        ),
    )


def create_from_widget(
    dashboard_id: str,
    widget: Widget,
    id_factory: IdFactory = new_id,
    clock: Clock = utc_now,
) -> Widget:
    """Copy an existing widget into another dashboard under a new ID.

    Content is not validated again and ``order`` is kept as is.
    """
    return widget.model_copy(
        update={"id": id_factory(), "dashboardId": dashboard_id, "updatedAt": clock()}
    )


def update_widget(
    widget: Widget, name: str, content: Any, clock: Clock = utc_now
) -> Widget:
    """Replace name and content of a widget, keeping its identity and order."""
    updated = create_widget(
        name,
        widget.dashboardId,
        widget.widgetType,
        content,
        widget_id=widget.id,
        clock=clock,
    )
    return updated.model_copy(update={"order": widget.order})


def set_widget_order(widget: Widget, order: int, clock: Clock = utc_now) -> Widget:
    return widget.model_copy(update={"order": order, "updatedAt": clock()})


def from_item(item: Mapping[str, Any], clock: Clock = utc_now) -> Widget:
    """
    Build a typed widget from a stored item.

    Missing attributes on older items:
    - updatedAt missing -> current time
    - order missing     -> 0

    Content keys the variant does not declare are kept as stored.

    Raises:
        MalformedKeyError: pk or sk lacks its prefix
        MalformedItemError: content is not a map
    """
    widget_id = extract_widget_id(item["sk"])
    dashboard_id = extract_dashboard_id(item["pk"])

    updated_at = parse_iso(item.get("updatedAt"))
    if updated_at is None:
        updated_at = clock()

    tag = _widget_type(item.get("widgetType"))
    widget_model, content_model = WIDGET_VARIANTS[tag]

    return widget_model.model_construct(
        id=widget_id,
        dashboardId=dashboard_id,
        name=item.get("name"),
        widgetType=tag,
        order=int(item.get("order") or 0),
        updatedAt=updated_at,
        content=_narrow_content(content_model, item.get("content")),
    )


def from_items(
    items: Iterable[Mapping[str, Any]], clock: Clock = utc_now
) -> List[Widget]:
    return [from_item(item, clock) for item in items]


def to_item(widget: Widget) -> Dict[str, Any]:
    """Convert a widget to its storage item."""
    key = widget_key(widget.dashboardId, widget.id)
    item = {
        "pk": key.pk,
        "sk": key.sk,
        "type": WIDGET_ITEM_TYPE,
        "name": widget.name,
        "widgetType": WidgetType(widget.widgetType).value,
        "order": widget.order,
        "content": widget.content.model_dump(
            mode="json", by_alias=True, exclude_none=True
        ),
    }
    if widget.updatedAt is not None:
        item["updatedAt"] = to_iso(widget.updatedAt)
    return item


def _widget_type(value) -> WidgetType:
    try:
        return WidgetType(value)
    except (ValueError, TypeError):
        raise InvalidWidgetTypeError(value) from None


def _content_mapping(content: Any) -> Mapping[str, Any]:
    if content is None:
        return {}
    if not isinstance(content, Mapping):
        raise WidgetValidationError("content", "Widget content must be an object")
    return content


def _s3_key(value: Any, label: str) -> S3Key:
    if isinstance(value, S3Key):
        return value
    try:
        return S3Key.model_validate(value)
    except PydanticValidationError:
        raise WidgetValidationError(
            "s3Key",
            f"{label} widget `content.s3Key` must have `raw` and `json` fields",
        ) from None


def _build(model: type, label: str, **values):
    """Instantiate a pydantic model, reporting the first bad field."""
    try:
        return model(**values)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "content"
        logger.debug(
            "Widget field failed type validation",
            extra={"field": field, "widget_type": label},
        )
        raise WidgetValidationError(
            field, f"{label} widget has invalid `{field}`: {error['msg']}"
        ) from None


def _narrow_content(content_model: type, content: Any) -> BaseModel:
    if content is None:
        content = {}
    if not isinstance(content, Mapping):
        raise MalformedItemError(
            "content",
            f"Stored widget content must be a map, got {type(content).__name__}",
        )
    values = dict(content)
    fields = content_model.model_fields

    s3_key = values.get("s3Key")
    if "s3Key" in fields and isinstance(s3_key, Mapping):
        values["s3Key"] = S3Key.model_construct(
            raw=s3_key.get("raw"), json_=s3_key.get("json")
        )

    chart_type = values.get("chartType")
    if (
        "chartType" in fields
        and isinstance(chart_type, str)
        and chart_type in _CHART_TYPES
    ):
        values["chartType"] = ChartType(chart_type)

    return content_model.model_construct(**values)
