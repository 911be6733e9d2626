"""Request Schemas - Pydantic models validating payloads handed to components."""
