"""Products service: product catalog access layer."""
