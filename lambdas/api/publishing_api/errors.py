"""Error types raised by the widget and dataset factories."""


class PublishingError(Exception):
    """Base error for the mapping layer."""


class WidgetValidationError(PublishingError, ValueError):
    """A required widget content field is missing or malformed."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class InvalidWidgetTypeError(PublishingError, ValueError):
    """Widget type tag is not one of Text, Chart or Table."""

    def __init__(self, widget_type):
        super().__init__(f"Invalid widget type '{widget_type}'")
        self.widget_type = widget_type


class MalformedItemError(PublishingError):
    """A stored item has an attribute of the wrong shape."""

    def __init__(self, attribute: str, message: str):
        super().__init__(message)
        self.attribute = attribute


class MalformedKeyError(PublishingError):
    """A stored key does not carry the prefix expected for its entity."""

    def __init__(self, key, expected_prefix: str):
        super().__init__(f"Key '{key}' does not start with '{expected_prefix}'")
        self.key = key
        self.expected_prefix = expected_prefix
