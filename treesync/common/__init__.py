"""Small helpers shared across treesync packages."""
