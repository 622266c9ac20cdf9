"""Dashboard publishing API: widget and dataset mapping over a single DynamoDB table."""
