"""Core domain: models, schemas, repositories, services and shared infrastructure."""
