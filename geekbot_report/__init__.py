"""Geekbot participation report generator."""
