"""Pydantic models for SafeZone API payloads.

Field names are snake_case in Python and camelCase on the wire.
"""
