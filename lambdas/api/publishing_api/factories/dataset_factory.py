"""Dataset construction and item mapping."""

from typing import Any, Dict

from aws_lambda_powertools import Logger

from ..config import LOG_LEVEL
from ..keys import DATASET_ITEM_TYPE, dataset_key, extract_dataset_id
from ..models import Dataset, DatasetInfo, S3Key, SourceType
from .factory_utils import Clock, IdFactory, new_id, parse_iso, to_iso, utc_now

logger = Logger(service="dataset-factory", level=LOG_LEVEL)


def create_new(
    info: DatasetInfo, id_factory: IdFactory = new_id, clock: Clock = utc_now
) -> Dataset:
    """Create a new dataset from upload metadata with a fresh ID."""
    return Dataset(
        id=id_factory(),
        fileName=info.fileName,
        createdBy=info.createdBy,
        s3Key=info.s3Key,
        updatedAt=clock(),
        sourceType=info.sourceType,
    )


def from_item(item: Dict[str, Any], clock: Clock = utc_now) -> Dataset:
    """
    Build a Dataset from a stored item.

    Items written before these attributes existed are filled in:
    - updatedAt missing  -> current time
    - sourceType missing -> FileUpload
    """
    dataset_id = extract_dataset_id(item["pk"])

    updated_at = parse_iso(item.get("updatedAt"))
    if updated_at is None:
        updated_at = clock()

    source_type = item.get("sourceType")
    if not source_type:
        logger.debug(
            "Dataset item has no sourceType, defaulting to FileUpload",
            extra={"dataset_id": dataset_id},
        )
        source_type = SourceType.FILE_UPLOAD

    return Dataset(
        id=dataset_id,
        fileName=item["fileName"],
        createdBy=item["createdBy"],
        s3Key=S3Key.model_validate(item["s3Key"]),
        updatedAt=updated_at,
        sourceType=SourceType(source_type),
    )


def to_item(dataset: Dataset, clock: Clock = utc_now) -> Dict[str, Any]:
    """Convert a Dataset to its storage item."""
    key = dataset_key(dataset.id)
    return {
        "pk": key.pk,
        "sk": key.sk,
        "type": DATASET_ITEM_TYPE,
        "createdBy": dataset.createdBy,
        "fileName": dataset.fileName,
        "s3Key": dataset.s3Key.model_dump(by_alias=True),
        "updatedAt": to_iso(dataset.updatedAt or clock()),
        "sourceType": dataset.sourceType.value,
    }
