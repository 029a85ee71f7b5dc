"""Annotation utilities and structural predicates."""
