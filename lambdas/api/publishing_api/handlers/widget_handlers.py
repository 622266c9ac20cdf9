"""Dashboard widget handlers - create, read, update, delete, reorder, duplicate."""

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.parser import parse

from ..config import LOG_LEVEL, METRICS_NAMESPACE
from ..event_publisher import (
    publish_dashboard_duplicated,
    publish_widget_created,
    publish_widget_deleted,
    publish_widgets_reordered,
)
from ..factories import widget_factory
from ..models import (
    CreateWidgetRequest,
    DuplicateWidgetsRequest,
    SetWidgetOrderRequest,
    UpdateWidgetRequest,
)
from ..services import dashboard_store
from .responses import (
    error_response,
    map_errors,
    success_response,
    validation_error_response,
)

logger = Logger(service="dashboard-widgets", level=LOG_LEVEL)
tracer = Tracer(service="dashboard-widgets")
metrics = Metrics(namespace=METRICS_NAMESPACE, service="dashboard")


def register_widget_routes(app):
    """Register all widget routes."""

    @app.post("/dashboard/<dashboard_id>/widget")
    @tracer.capture_method
    @map_errors("creating widget")
    def widget_post(dashboard_id: str):
        """Create a widget in a dashboard."""
        request = parse(
            event=app.current_event.json_body or {}, model=CreateWidgetRequest
        )

        widget = widget_factory.create_widget(
            request.name, dashboard_id, request.widgetType, request.content
        )
        dashboard_store.put_widget_item(widget_factory.to_item(widget))

        logger.info(
            "Widget created",
            extra={
                "dashboard_id": dashboard_id,
                "widget_id": widget.id,
                "widget_type": widget.widgetType.value,
            },
        )
        publish_widget_created(dashboard_id, widget.id, widget.widgetType.value)
        metrics.add_metric(name="WidgetCreations", unit=MetricUnit.Count, value=1)

        return success_response(_widget_body(widget), status_code=201)

    @app.get("/dashboard/<dashboard_id>/widgets")
    @tracer.capture_method
    @map_errors("listing widgets")
    def widgets_get(dashboard_id: str):
        """List a dashboard's widgets by position."""
        widgets = widget_factory.from_items(
            dashboard_store.query_widget_items(dashboard_id)
        )
        widgets.sort(key=lambda w: w.order)
        return success_response([_widget_body(w) for w in widgets])

    @app.get("/dashboard/<dashboard_id>/widget/<widget_id>")
    @tracer.capture_method
    @map_errors("getting widget")
    def widget_get(dashboard_id: str, widget_id: str):
        item = dashboard_store.get_widget_item(dashboard_id, widget_id)
        if item is None:
            return _not_found(widget_id)
        return success_response(_widget_body(widget_factory.from_item(item)))

    @app.put("/dashboard/<dashboard_id>/widget/<widget_id>")
    @tracer.capture_method
    @map_errors("updating widget")
    def widget_put(dashboard_id: str, widget_id: str):
        """Replace a widget's name and content; type and order are kept."""
        request = parse(
            event=app.current_event.json_body or {}, model=UpdateWidgetRequest
        )

        item = dashboard_store.get_widget_item(dashboard_id, widget_id)
        if item is None:
            return _not_found(widget_id)

        widget = widget_factory.update_widget(
            widget_factory.from_item(item), request.name, request.content
        )
        dashboard_store.put_widget_item(widget_factory.to_item(widget))

        logger.info(
            "Widget updated",
            extra={"dashboard_id": dashboard_id, "widget_id": widget_id},
        )
        metrics.add_metric(name="WidgetUpdates", unit=MetricUnit.Count, value=1)
        return success_response(_widget_body(widget))

    @app.delete("/dashboard/<dashboard_id>/widget/<widget_id>")
    @tracer.capture_method
    @map_errors("deleting widget")
    def widget_delete(dashboard_id: str, widget_id: str):
        if not dashboard_store.delete_widget_item(dashboard_id, widget_id):
            return _not_found(widget_id)

        logger.info(
            "Widget deleted",
            extra={"dashboard_id": dashboard_id, "widget_id": widget_id},
        )
        publish_widget_deleted(dashboard_id, widget_id)
        metrics.add_metric(name="WidgetDeletions", unit=MetricUnit.Count, value=1)
        return success_response({"id": widget_id})

    @app.put("/dashboard/<dashboard_id>/widgetorder")
    @tracer.capture_method
    @map_errors("reordering widgets")
    def widget_order_put(dashboard_id: str):
        """Set the position of the listed widgets."""
        request = parse(
            event=app.current_event.json_body or {}, model=SetWidgetOrderRequest
        )

        widgets = {
            w.id: w
            for w in widget_factory.from_items(
                dashboard_store.query_widget_items(dashboard_id)
            )
        }
        unknown = [entry.id for entry in request.widgets if entry.id not in widgets]
        if unknown:
            return validation_error_response(
                [
                    {
                        "field": f"widgets[{widget_id}]",
                        "message": f"Widget {widget_id} does not belong to dashboard",
                    }
                    for widget_id in unknown
                ]
            )

        reordered = [
            widget_factory.set_widget_order(widgets[entry.id], entry.order)
            for entry in request.widgets
        ]
        dashboard_store.put_widget_items(
            [widget_factory.to_item(w) for w in reordered]
        )

        publish_widgets_reordered(dashboard_id, len(reordered))
        return success_response([_widget_body(w) for w in reordered])

    @app.post("/dashboard/<dashboard_id>/duplicate")
    @tracer.capture_method
    @map_errors("duplicating widgets")
    def widgets_duplicate_post(dashboard_id: str):
        """Copy every widget of a dashboard into another dashboard."""
        request = parse(
            event=app.current_event.json_body or {}, model=DuplicateWidgetsRequest
        )

        source = widget_factory.from_items(
            dashboard_store.query_widget_items(dashboard_id)
        )
        copies = [
            widget_factory.create_from_widget(request.dashboardId, w) for w in source
        ]
        if copies:
            dashboard_store.put_widget_items(
                [widget_factory.to_item(w) for w in copies]
            )

        logger.info(
            "Dashboard widgets duplicated",
            extra={
                "source_dashboard_id": dashboard_id,
                "dashboard_id": request.dashboardId,
                "widget_count": len(copies),
            },
        )
        publish_dashboard_duplicated(dashboard_id, request.dashboardId, len(copies))
        metrics.add_metric(
            name="WidgetCreations", unit=MetricUnit.Count, value=len(copies)
        )
        return success_response([_widget_body(w) for w in copies], status_code=201)


def _widget_body(widget) -> dict:
    return widget.model_dump(mode="json", by_alias=True, exclude_none=True)


def _not_found(widget_id: str):
    return error_response(404, "NOT_FOUND", f"Widget {widget_id} not found")
