"""Utility modules for Git Versioner."""
