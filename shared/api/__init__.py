"""Cross-cutting API plumbing: authentication, error responses, health views."""
