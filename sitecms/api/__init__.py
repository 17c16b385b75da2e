"""
API/Presentation Layer
======================

HTTP API layer using FastAPI.
This layer handles HTTP requests and responses.

Contains:
- Controllers: FastAPI route handlers, one module per admin screen plus
  the public website endpoints
- Security: the signed admin session cookie
- Dependencies: service lookups in the DI container
"""
