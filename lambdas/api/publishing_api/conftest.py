"""Shared pytest configuration for the Dashboard Publishing API tests."""

import os

# Powertools reads these when the handler modules are imported
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "dashboard-publishing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("DASHBOARD_TABLE_NAME", "dashboard_table_test")

from datetime import datetime, timezone  # noqa: E402
from itertools import count  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402

FIXED_NOW = datetime(2024, 5, 1, 10, 20, 30, 123000, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    """Clock frozen at a millisecond-precision instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def id_factory():
    """Deterministic IDs: id-1, id-2, ..."""
    counter = count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def chart_content():
    return {
        "title": "Monthly visits",
        "chartType": "BarChart",
        "datasetId": "ds-1",
        "summary": "Visits per month",
        "s3Key": {"raw": "raw/visits.csv", "json": "json/visits.json"},
        "fileName": "visits.csv",
    }


@pytest.fixture
def table_content():
    return {
        "title": "Visits table",
        "datasetId": "ds-1",
        "s3Key": {"raw": "raw/visits.csv", "json": "json/visits.json"},
        "fileName": "visits.csv",
        "datasetType": "StaticDataset",
    }


@pytest.fixture
def lambda_context():
    """Minimal Lambda context for the Powertools handler decorators."""
    context = MagicMock()
    context.function_name = "publishing-api"
    context.memory_limit_in_mb = 128
    context.invoked_function_arn = (
        "arn:aws:lambda:us-east-1:123456789012:function:publishing-api"
    )
    context.aws_request_id = "req-1"
    return context
