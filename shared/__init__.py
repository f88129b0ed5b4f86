"""
Shared Kernel

Utilities shared across all domain apps: API authentication, error
handling and service-level views.
"""
