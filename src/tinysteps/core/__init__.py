"""Core domain: models, schemas, validation and the in-memory store."""
