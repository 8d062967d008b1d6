"""Server glue: ASGI translation, response sending, error responses."""
