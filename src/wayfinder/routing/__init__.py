"""Route patterns, resolution, href construction, and breadcrumbs."""
