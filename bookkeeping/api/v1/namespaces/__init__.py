"""API namespaces."""
