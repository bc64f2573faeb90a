"""Core domain primitives for neo-quotas: exceptions and value objects."""
