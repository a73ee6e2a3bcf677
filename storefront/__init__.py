"""
storefront - user, product and order demo services.
"""

__version__ = "1.0.0"
