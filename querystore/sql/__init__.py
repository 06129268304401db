"""Query file parsing: block scanning, parameter resolution, sources and the registry."""
