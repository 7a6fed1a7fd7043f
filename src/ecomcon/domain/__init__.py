"""Pure line-level domain logic: tags, classification, and error types."""
