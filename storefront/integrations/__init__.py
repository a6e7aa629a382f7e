"""External collaborators: backend tables, auth, Sentry."""
