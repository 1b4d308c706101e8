"""Infrastructure layer for filesystem app.

This package contains integrations with external systems:
- S3-compatible storage for exported folders

Keep infrastructure concerns separate from business logic.
"""
