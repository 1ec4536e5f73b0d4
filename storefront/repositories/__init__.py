"""
Persistence adapters.

These modules encapsulate how storefront data is stored and retrieved (in
memory or in a relational database). Callers depend on the Storage interface
rather than on a concrete backend.
"""
