"""Analytics and catalog services."""
