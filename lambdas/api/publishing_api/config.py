"""Environment configuration for the Dashboard Publishing API Lambda."""

import os

DASHBOARD_TABLE_NAME = os.environ.get("DASHBOARD_TABLE_NAME", "dashboard_table_dev")
AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

EVENT_BUS_NAME = os.environ.get("EVENT_BUS_NAME", "default")
EVENT_SOURCE = "publishing.dashboard"

METRICS_NAMESPACE = "dashboard-publishing"
