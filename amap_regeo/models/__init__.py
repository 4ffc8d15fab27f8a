"""
Data Models Module
----------------
Contains Pydantic models for data validation and serialization.
Defines the shape of the AMap regeo payload and the normalized address returned to callers.
"""
