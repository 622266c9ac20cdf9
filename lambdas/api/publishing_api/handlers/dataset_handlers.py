"""Dataset handlers - register an uploaded dataset and read it back."""

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.parser import parse

from ..config import LOG_LEVEL, METRICS_NAMESPACE
from ..event_publisher import publish_dataset_created
from ..factories import dataset_factory
from ..models import CreateDatasetRequest, DatasetInfo, SourceType
from ..services import dashboard_store
from ..user_auth import extract_user_context
from .responses import error_response, map_errors, success_response

logger = Logger(service="dashboard-datasets", level=LOG_LEVEL)
tracer = Tracer(service="dashboard-datasets")
metrics = Metrics(namespace=METRICS_NAMESPACE, service="dashboard")


def register_dataset_routes(app):
    """Register all dataset routes."""

    @app.post("/dataset")
    @tracer.capture_method
    @map_errors("creating dataset")
    def dataset_post():
        user_context = extract_user_context(app.current_event.raw_event)
        created_by = user_context.get("username") or user_context.get("user_id")
        if not created_by:
            return error_response(401, "UNAUTHORIZED", "Authentication required")

        request = parse(
            event=app.current_event.json_body or {}, model=CreateDatasetRequest
        )

        dataset = dataset_factory.create_new(
            DatasetInfo(
                fileName=request.fileName,
                createdBy=created_by,
                s3Key=request.s3Key,
                sourceType=request.sourceType or SourceType.FILE_UPLOAD,
            )
        )
        dashboard_store.put_dataset_item(dataset_factory.to_item(dataset))

        logger.info(
            "Dataset created",
            extra={"dataset_id": dataset.id, "created_by": created_by},
        )
        publish_dataset_created(dataset.id, created_by)
        metrics.add_metric(name="DatasetCreations", unit=MetricUnit.Count, value=1)

        return success_response(_dataset_body(dataset), status_code=201)

    @app.get("/dataset/<dataset_id>")
    @tracer.capture_method
    @map_errors("getting dataset")
    def dataset_get(dataset_id: str):
        item = dashboard_store.get_dataset_item(dataset_id)
        if item is None:
            return error_response(404, "NOT_FOUND", f"Dataset {dataset_id} not found")
        return success_response(_dataset_body(dataset_factory.from_item(item)))


def _dataset_body(dataset) -> dict:
    return dataset.model_dump(mode="json", by_alias=True)
