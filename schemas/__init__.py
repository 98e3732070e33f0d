"""
Pydantic request/response models.
"""
