"""Wrappers around the external tools dotstrap drives."""
