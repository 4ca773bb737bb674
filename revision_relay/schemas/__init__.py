# Schemas package init
"""
Revision Relay — API Schemas
=============================

What:  Pydantic models for request bodies and JSON responses.
"""
