"""
Core app - Shared abstractions and utilities.

This app provides:
- The error taxonomy (exceptions.py) and API exception handlers (handlers.py)
- Store error translation for async services (decorators.py)
- Management commands: seed (sample tasks/rewards), serve (ASGI server)
"""
