"""Event model, settings and errors."""
