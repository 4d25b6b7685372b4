"""Core transform and sprite machinery."""
