"""Turn session state into table models and message lines."""
