"""
Password hashing and bearer-token handling.
"""
