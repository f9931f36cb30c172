"""Web framework adapters for the admin console endpoints."""
