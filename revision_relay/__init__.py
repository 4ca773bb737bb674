"""
Revision Relay — Application Package Initializer
=================================================

What: Marks the `revision_relay` directory as a Python package.
Who:  Imported by uvicorn (`revision_relay.main:app`), pytest and the
      `python -m revision_relay` entry point.

Architecture Note:
    The backend is a thin relay in front of two external providers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP status mapping only
    ├─────────────────────────────────────┤
    │     Relays (Generation / Upload)    │  ← one attempt, typed outcome
    ├─────────────────────────────────────┤
    │  Providers (Gemini / Object store)  │  ← SDK calls, error translation
    └─────────────────────────────────────┘

    Nothing is persisted locally. Provider objects are built once at startup
    and handed to the relays; the relays are handed to the routes.
"""

__version__ = "1.0.0"
