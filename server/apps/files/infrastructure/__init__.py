"""Infrastructure layer for files app.

This package contains integrations with external systems:
- The S3-compatible blob store (presigned upload and download URLs)
- Media type recognition for uploaded content

Keep infrastructure concerns separate from business logic.
"""
