"""Storage and export boundaries."""
