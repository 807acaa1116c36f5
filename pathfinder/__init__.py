"""
Future Path Finder

Collects a student's profile and recommends undergraduate programs using
Google Gemini.
"""

__version__ = "0.1.0"
