"""Core framework components.

Configuration, logging, request context and the domain error registry.
"""
