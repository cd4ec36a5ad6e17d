"""Test package for patterndrill."""
