"""School portal client: role dashboards over the school-management REST API."""
