"""
Shared building blocks: validators, partial updates, security helpers and middleware.
"""
