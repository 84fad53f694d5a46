"""HTTP surface: routes and API key authentication."""
