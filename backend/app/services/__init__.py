"""Services Layer — orchestration between HTTP handlers and the store."""
