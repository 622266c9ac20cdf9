"""
Factories mapping domain objects to and from single-table items.

Use as modules: ``widget_factory.create_widget(...)``,
``dataset_factory.from_item(...)``.
"""

from . import dataset_factory, widget_factory

__all__ = ["dataset_factory", "widget_factory"]
