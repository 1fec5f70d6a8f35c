"""REST client for the school-management backend."""
