"""Timeline data model, time base and param lookup helpers."""
