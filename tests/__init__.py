"""Test suite for docsynth."""
