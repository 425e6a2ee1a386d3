"""
Domain Layer

Entities, value objects, events and repository ports of the café.
"""
