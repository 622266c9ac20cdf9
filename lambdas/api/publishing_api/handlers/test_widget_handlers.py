"""
Unit tests for the widget routes
Testing request validation, status codes and store interaction with a mocked store
"""

from unittest.mock import patch

import pytest
from pynamodb.exceptions import PutError

from . import widget_handlers


@pytest.fixture
def store():
    with patch.object(widget_handlers, "dashboard_store") as store:
        yield store


def _text_item(widget_id, order=0, text="t"):
    return {
        "pk": "Dashboard#D1",
        "sk": f"Widget#{widget_id}",
        "type": "Widget",
        "widgetType": "Text",
        "name": f"name-{widget_id}",
        "order": order,
        "updatedAt": "2024-05-01T10:20:30.123Z",
        "content": {"text": text},
    }


class TestCreateWidget:
    """Tests for POST /dashboard/<id>/widget"""

    def test_create_text_widget(self, store, api_event, invoke):
        status, body = invoke(
            api_event(
                "POST",
                "/dashboard/D1/widget",
                {"name": "Intro", "widgetType": "Text", "content": {"text": "hi"}},
            )
        )

        assert status == 201
        assert body["success"] is True
        assert body["data"]["widgetType"] == "Text"
        assert body["data"]["dashboardId"] == "D1"
        assert body["data"]["order"] == 0
        assert body["data"]["content"] == {"text": "hi"}

        item = store.put_widget_item.call_args.args[0]
        assert item["pk"] == "Dashboard#D1"
        assert item["sk"] == f"Widget#{body['data']['id']}"
        assert item["type"] == "Widget"

    def test_create_publishes_event(self, store, api_event, invoke, eventbridge):
        invoke(
            api_event(
                "POST",
                "/dashboard/D1/widget",
                {"name": "Intro", "widgetType": "Text", "content": {"text": "hi"}},
            )
        )
        entry = eventbridge.put_events.call_args.kwargs["Entries"][0]
        assert entry["DetailType"] == "WidgetCreated"

    def test_strip_api_prefix(self, store, api_event, invoke):
        status, _ = invoke(
            api_event(
                "POST",
                "/api/dashboard/D1/widget",
                {"name": "Intro", "widgetType": "Text", "content": {"text": "hi"}},
            )
        )
        assert status == 201

    def test_invalid_chart_type(self, store, api_event, invoke, chart_content):
        chart_content["chartType"] = "RadarChart"
        status, body = invoke(
            api_event(
                "POST",
                "/dashboard/D1/widget",
                {"name": "c", "widgetType": "Chart", "content": chart_content},
            )
        )

        assert status == 400
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["details"][0]["field"] == "chartType"
        store.put_widget_item.assert_not_called()

    def test_missing_content_field(self, store, api_event, invoke):
        status, body = invoke(
            api_event(
                "POST",
                "/dashboard/D1/widget",
                {"name": "Intro", "widgetType": "Text", "content": {}},
            )
        )
        assert status == 400
        assert body["error"]["details"][0]["field"] == "text"

    def test_unknown_widget_type(self, store, api_event, invoke):
        status, body = invoke(
            api_event(
                "POST",
                "/dashboard/D1/widget",
                {"name": "x", "widgetType": "Bogus", "content": {"text": "hi"}},
            )
        )
        assert status == 400
        assert body["error"]["details"][0]["field"] == "widgetType"

    def test_missing_name(self, store, api_event, invoke):
        status, body = invoke(
            api_event(
                "POST",
                "/dashboard/D1/widget",
                {"widgetType": "Text", "content": {"text": "hi"}},
            )
        )
        assert status == 400
        assert body["error"]["details"][0]["field"] == "name"

    def test_database_error(self, store, api_event, invoke):
        store.put_widget_item.side_effect = PutError("throttled")
        status, body = invoke(
            api_event(
                "POST",
                "/dashboard/D1/widget",
                {"name": "Intro", "widgetType": "Text", "content": {"text": "hi"}},
            )
        )
        assert status == 500
        assert body["error"]["code"] == "DATABASE_ERROR"


class TestGetWidget:
    """Tests for GET /dashboard/<id>/widget/<widgetId>"""

    def test_get_widget(self, store, api_event, invoke):
        store.get_widget_item.return_value = _text_item("W1", order=2)

        status, body = invoke(api_event("GET", "/dashboard/D1/widget/W1"))

        assert status == 200
        assert body["data"]["id"] == "W1"
        assert body["data"]["order"] == 2
        store.get_widget_item.assert_called_once_with("D1", "W1")

    def test_not_found(self, store, api_event, invoke):
        store.get_widget_item.return_value = None
        status, body = invoke(api_event("GET", "/dashboard/D1/widget/W1"))
        assert status == 404
        assert body["error"]["code"] == "NOT_FOUND"

    def test_malformed_stored_key(self, store, api_event, invoke):
        item = _text_item("W1")
        item["pk"] = "Dataset#D1"
        store.get_widget_item.return_value = item

        status, body = invoke(api_event("GET", "/dashboard/D1/widget/W1"))

        assert status == 500
        assert body["error"]["code"] == "MALFORMED_KEY"

    def test_malformed_stored_content(self, store, api_event, invoke):
        item = _text_item("W1")
        item["content"] = "hello"
        store.get_widget_item.return_value = item

        status, body = invoke(api_event("GET", "/dashboard/D1/widget/W1"))

        assert status == 500
        assert body["error"]["code"] == "MALFORMED_ITEM"


class TestListWidgets:
    """Tests for GET /dashboard/<id>/widgets"""

    def test_sorted_by_order(self, store, api_event, invoke):
        store.query_widget_items.return_value = [
            _text_item("W1", order=2),
            _text_item("W2", order=0),
            _text_item("W3", order=1),
        ]

        status, body = invoke(api_event("GET", "/dashboard/D1/widgets"))

        assert status == 200
        assert [w["id"] for w in body["data"]] == ["W2", "W3", "W1"]


class TestUpdateWidget:
    """Tests for PUT /dashboard/<id>/widget/<widgetId>"""

    def test_update_keeps_order(self, store, api_event, invoke):
        store.get_widget_item.return_value = _text_item("W1", order=3)

        status, body = invoke(
            api_event(
                "PUT",
                "/dashboard/D1/widget/W1",
                {"name": "renamed", "content": {"text": "new"}},
            )
        )

        assert status == 200
        assert body["data"]["id"] == "W1"
        assert body["data"]["order"] == 3
        assert body["data"]["name"] == "renamed"
        assert body["data"]["content"] == {"text": "new"}
        item = store.put_widget_item.call_args.args[0]
        assert item["order"] == 3
        assert item["content"] == {"text": "new"}

    def test_update_validates_content(self, store, api_event, invoke):
        store.get_widget_item.return_value = _text_item("W1")
        status, body = invoke(
            api_event("PUT", "/dashboard/D1/widget/W1", {"name": "n", "content": {}})
        )
        assert status == 400
        assert body["error"]["details"][0]["field"] == "text"
        store.put_widget_item.assert_not_called()

    def test_update_missing_widget(self, store, api_event, invoke):
        store.get_widget_item.return_value = None
        status, _ = invoke(
            api_event(
                "PUT", "/dashboard/D1/widget/W1", {"name": "n", "content": {"text": "x"}}
            )
        )
        assert status == 404


class TestDeleteWidget:
    """Tests for DELETE /dashboard/<id>/widget/<widgetId>"""

    def test_delete(self, store, api_event, invoke):
        store.delete_widget_item.return_value = True
        status, body = invoke(api_event("DELETE", "/dashboard/D1/widget/W1"))
        assert status == 200
        assert body["data"] == {"id": "W1"}
        store.delete_widget_item.assert_called_once_with("D1", "W1")

    def test_delete_missing(self, store, api_event, invoke):
        store.delete_widget_item.return_value = False
        status, _ = invoke(api_event("DELETE", "/dashboard/D1/widget/W1"))
        assert status == 404


class TestWidgetOrder:
    """Tests for PUT /dashboard/<id>/widgetorder"""

    def test_reorder(self, store, api_event, invoke):
        store.query_widget_items.return_value = [
            _text_item("W1", order=0),
            _text_item("W2", order=1),
        ]

        status, body = invoke(
            api_event(
                "PUT",
                "/dashboard/D1/widgetorder",
                {"widgets": [{"id": "W1", "order": 1}, {"id": "W2", "order": 0}]},
            )
        )

        assert status == 200
        assert {w["id"]: w["order"] for w in body["data"]} == {"W1": 1, "W2": 0}
        items = store.put_widget_items.call_args.args[0]
        assert {i["sk"]: i["order"] for i in items} == {"Widget#W1": 1, "Widget#W2": 0}

    def test_reorder_keeps_stored_content(self, store, api_event, invoke):
        item = _text_item("W1")
        item["content"] = {"text": "t", "showTitle": True}
        store.query_widget_items.return_value = [item]

        status, _ = invoke(
            api_event(
                "PUT",
                "/dashboard/D1/widgetorder",
                {"widgets": [{"id": "W1", "order": 4}]},
            )
        )

        assert status == 200
        written = store.put_widget_items.call_args.args[0][0]
        assert written["content"] == {"text": "t", "showTitle": True}

    def test_unknown_widget(self, store, api_event, invoke):
        store.query_widget_items.return_value = [_text_item("W1")]

        status, body = invoke(
            api_event(
                "PUT",
                "/dashboard/D1/widgetorder",
                {"widgets": [{"id": "W9", "order": 1}]},
            )
        )

        assert status == 400
        assert body["error"]["details"][0]["field"] == "widgets[W9]"
        store.put_widget_items.assert_not_called()

    def test_negative_order_rejected(self, store, api_event, invoke):
        status, _ = invoke(
            api_event(
                "PUT",
                "/dashboard/D1/widgetorder",
                {"widgets": [{"id": "W1", "order": -1}]},
            )
        )
        assert status == 400


class TestDuplicateWidgets:
    """Tests for POST /dashboard/<id>/duplicate"""

    def test_duplicate_into_new_dashboard(self, store, api_event, invoke):
        store.query_widget_items.return_value = [
            _text_item("W1", order=0, text="a"),
            _text_item("W2", order=1, text="b"),
        ]

        status, body = invoke(
            api_event("POST", "/dashboard/D1/duplicate", {"dashboardId": "D2"})
        )

        assert status == 201
        assert [w["dashboardId"] for w in body["data"]] == ["D2", "D2"]
        assert [w["order"] for w in body["data"]] == [0, 1]
        assert [w["content"]["text"] for w in body["data"]] == ["a", "b"]
        assert not {"W1", "W2"} & {w["id"] for w in body["data"]}

        items = store.put_widget_items.call_args.args[0]
        assert all(i["pk"] == "Dashboard#D2" for i in items)

    def test_duplicate_empty_dashboard(self, store, api_event, invoke):
        store.query_widget_items.return_value = []
        status, body = invoke(
            api_event("POST", "/dashboard/D1/duplicate", {"dashboardId": "D2"})
        )
        assert status == 201
        assert body["data"] == []
        store.put_widget_items.assert_not_called()

    def test_duplicate_keeps_stored_content(self, store, api_event, invoke):
        item = _text_item("W1")
        item["content"] = {"text": "a", "showTitle": False}
        store.query_widget_items.return_value = [item]

        status, _ = invoke(
            api_event("POST", "/dashboard/D1/duplicate", {"dashboardId": "D2"})
        )

        assert status == 201
        written = store.put_widget_items.call_args.args[0][0]
        assert written["pk"] == "Dashboard#D2"
        assert written["content"] == {"text": "a", "showTitle": False}
