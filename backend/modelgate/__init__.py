"""modelgate: provider adapters for chat model backends."""
