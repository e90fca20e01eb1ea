"""API package containing the HTTP routes and their shared dependencies."""
