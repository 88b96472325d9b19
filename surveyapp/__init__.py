"""Survey presentation layer: domain, use cases, adapters, and view models."""
