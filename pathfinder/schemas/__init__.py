"""
Pydantic schemas for domain state and API request/response validation.

All FastAPI endpoints use strict Pydantic models with explicit types.
"""
