"""Todo API - multi-user to-do list backend and client."""
