"""Models parts package; prefer ``promptlab_providers.base.models``."""
