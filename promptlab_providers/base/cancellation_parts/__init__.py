"""Cancellation token internals; import from ``base.cancellation``."""
