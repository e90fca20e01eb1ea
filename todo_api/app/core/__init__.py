"""Configuration, logging and the embedded document store."""
