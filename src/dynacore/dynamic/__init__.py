"""The dynamic value and its constructors."""
