"""
Recommendation System - Single-Shot Structured LLM Architecture

This module contains the prompt templates and the response schema for the
Gemini-based course recommendation client.

Architecture:
- Pattern: Single-shot LLM (one API call per request, no tools)
- Model: Gemini 2.5 Flash
- Output: Structured JSON (via response_schema), validated again with Pydantic

The service layer is in:
- pathfinder/services/recommendation_service.py

Prompt templates are in:
- pathfinder/agents/recommendation/prompts.py
"""

from pathfinder.agents.recommendation.prompts import (
    RECOMMENDATION_COUNT,
    RECOMMENDATION_RESPONSE_SCHEMA,
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_response_schema,
    build_recommendation_user_prompt,
)

__all__ = [
    "RECOMMENDATION_COUNT",
    "RECOMMENDATION_RESPONSE_SCHEMA",
    "RECOMMENDATION_SYSTEM_PROMPT",
    "build_recommendation_response_schema",
    "build_recommendation_user_prompt",
]
