"""
Petora Backend - API Schemas
=============================

What:  Pydantic models for what the API returns.
How:   FastAPI serializes route results through these models (by alias), so
       responses use the camelCase names and `_id` identity of the stored
       documents. ObjectIds are rendered as 24-hex strings.

Request bodies are taken as plain JSON objects and checked against the
document models in `petora.models` by the services, so every write goes
through the same validation step.
"""
