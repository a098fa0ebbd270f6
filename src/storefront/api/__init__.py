"""HTTP layer: application factory, response envelope, route guards and error mapping."""
