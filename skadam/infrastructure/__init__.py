"""
Infrastructure Layer

Contains external concerns like configuration, logging, persistence adapters
and notification channels.
"""
