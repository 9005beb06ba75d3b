"""Sample application whose components are nested inside other classes."""
