"""Business logic layer for files app.

This package contains all business logic for file operations:
- Access checks for scopes and files
- Listing with name search and favorites filtering
- Creating, deleting and starring files

All business logic should be implemented here, separate from
models (data layer), views (HTTP layer) and infrastructure
(external systems).
"""
