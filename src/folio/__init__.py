"""
Folio - extension composition engine for rich document editors

Folio resolves an ordered list of independently authored extensions into one
document schema, command namespace, shortcut table and lifecycle pipeline.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
