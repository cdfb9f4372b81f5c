"""Service layer: thin presentation surfaces over the stream session."""
