"""
Process-level services for the storefront.

Request handlers should obtain their storage through these helpers (once, at
startup) and pass it along instead of constructing backends themselves.
"""
