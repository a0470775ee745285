"""
Domain Layer
============

Value objects, errors and pure services.
"""
