"""
Pydantic schemas for API request/response validation.

Provides data models for all API endpoints including authentication,
employee and client management, daily work tracking, and reports.
"""
