"""Multi-user task tracker served as server-rendered Flask pages."""
