"""Generate typed Python declarations from GraphQL schemas."""
