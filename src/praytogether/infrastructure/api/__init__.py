"""HTTP surface: application factory, routes, schemas and middleware."""
