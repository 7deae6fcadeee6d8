"""
API module - FastAPI routes and HTTP handling.

This module handles:
- Request validation and parsing
- Response formatting
- Error handling
- Route definitions

The application object lives in knowyourself.api.main; it is not
imported here so routers can be used without building the app.
"""
