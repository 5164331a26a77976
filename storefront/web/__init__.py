"""
Web layer: page routes, JSON API and session helpers.
"""
