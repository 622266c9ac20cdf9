"""
Unit tests for the composite key codec.
Testing key composition, prefix stripping and malformed key detection
"""

import pytest

from .errors import MalformedKeyError
from .keys import (
    ItemKey,
    dataset_key,
    extract_dashboard_id,
    extract_dataset_id,
    extract_widget_id,
    widget_key,
    widget_partition_key,
    widget_sort_key,
)


class TestComposeKeys:
    """Tests for key composition"""

    def test_dataset_key_uses_same_value_for_pk_and_sk(self):
        assert dataset_key("abc") == ItemKey(pk="Dataset#abc", sk="Dataset#abc")

    def test_widget_partition_key_embeds_dashboard(self):
        assert widget_partition_key("D1") == "Dashboard#D1"

    def test_widget_sort_key_embeds_widget(self):
        assert widget_sort_key("W1") == "Widget#W1"

    def test_widget_key_pair(self):
        key = widget_key("D1", "W1")
        assert key.pk == "Dashboard#D1"
        assert key.sk == "Widget#W1"

    def test_same_input_gives_same_key(self):
        """Keys are deterministic"""
        assert widget_key("D1", "W1") == widget_key("D1", "W1")


class TestExtractIds:
    """Tests for prefix stripping"""

    def test_extract_dataset_id(self):
        assert extract_dataset_id("Dataset#abc") == "abc"

    def test_extract_dashboard_id(self):
        assert extract_dashboard_id("Dashboard#D1") == "D1"

    def test_extract_widget_id(self):
        assert extract_widget_id("Widget#W1") == "W1"

    def test_ids_containing_separator_survive(self):
        """Only the prefix is stripped, the rest is kept verbatim"""
        assert extract_widget_id(widget_sort_key("a#b")) == "a#b"

    def test_extract_inverts_compose(self):
        key = dataset_key("5f2c")
        assert extract_dataset_id(key.pk) == "5f2c"
        assert extract_dataset_id(key.sk) == "5f2c"


class TestMalformedKeys:
    """A missing prefix must raise, never truncate"""

    def test_wrong_prefix_raises(self):
        with pytest.raises(MalformedKeyError) as exc_info:
            extract_widget_id("Dashboard#D1")
        assert exc_info.value.expected_prefix == "Widget#"

    def test_bare_id_raises(self):
        with pytest.raises(MalformedKeyError):
            extract_dataset_id("abc")

    def test_prefix_is_case_sensitive(self):
        with pytest.raises(MalformedKeyError):
            extract_dashboard_id("dashboard#D1")

    def test_none_key_raises(self):
        with pytest.raises(MalformedKeyError):
            extract_dashboard_id(None)
