"""Route registration for the Dashboard Publishing API."""

from .dataset_handlers import register_dataset_routes
from .widget_handlers import register_widget_routes


def register_all_routes(app):
    """Register every route of the API on the resolver."""
    register_widget_routes(app)
    register_dataset_routes(app)


__all__ = ["register_all_routes", "register_dataset_routes", "register_widget_routes"]
