"""
Dependency injection container
"""

from skadam.infrastructure.container.dependency_injection import DependencyContainer

__all__ = ["DependencyContainer"]
