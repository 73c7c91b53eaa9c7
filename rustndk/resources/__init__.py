"""Data files bundled with rustndk."""
