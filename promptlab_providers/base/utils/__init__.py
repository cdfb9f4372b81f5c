"""Small side-effect free helpers shared by the vendor adapters."""
