"""
Service layer abstraction.

Each service encapsulates the store queries for one resource so API
handlers stay free of persistence details.
"""
