"""Core types shared by inspection and packaging."""
