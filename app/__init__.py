"""
Task tracker core: configuration, persistence, domain services.
"""
