"""Domain records (products, orders, contacts, subscribers) and seed data."""
