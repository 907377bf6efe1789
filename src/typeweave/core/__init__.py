"""Core typeweave types: the type model, configuration and errors."""
