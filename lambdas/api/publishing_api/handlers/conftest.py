"""Fixtures for route handler tests."""

import json
from unittest.mock import MagicMock, patch

import pytest

from .. import event_publisher


@pytest.fixture(autouse=True)
def eventbridge():
    """Replace the EventBridge client so no events leave the test."""
    client = MagicMock()
    with patch.object(event_publisher, "_get_eventbridge_client", return_value=client):
        yield client


@pytest.fixture
def api_event():
    """Build an API Gateway REST proxy event."""

    def _build(method, path, body=None, claims=None):
        authorizer = {"claims": claims} if claims else {}
        return {
            "resource": path,
            "path": path,
            "httpMethod": method,
            "headers": {"Content-Type": "application/json"},
            "multiValueHeaders": {},
            "queryStringParameters": None,
            "multiValueQueryStringParameters": None,
            "pathParameters": None,
            "stageVariables": None,
            "requestContext": {
                "requestId": "req-123",
                "httpMethod": method,
                "path": path,
                "stage": "test",
                "authorizer": authorizer,
            },
            "body": json.dumps(body) if body is not None else None,
            "isBase64Encoded": False,
        }

    return _build


@pytest.fixture
def invoke():
    """Resolve an event through the API resolver and decode the response."""
    from ..index import app

    def _invoke(event):
        response = app.resolve(event, MagicMock())
        return response["statusCode"], json.loads(response["body"])

    return _invoke
