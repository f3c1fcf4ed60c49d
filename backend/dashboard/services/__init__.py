"""Domain services shared by the API routes."""
