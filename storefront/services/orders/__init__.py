"""
Order Service - places orders against the user and product services.
"""
