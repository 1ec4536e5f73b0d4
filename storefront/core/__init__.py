"""
Core utilities shared across the storefront package.

This package hosts configuration helpers (environment variables, pool sizing,
feature flags) and cross-cutting concerns such as logging setup. Backends
depend on these primitives instead of reading the environment themselves.
"""
