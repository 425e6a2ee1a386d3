"""
Application layer: stores, use cases and DTOs
"""
