"""Domain services: catalog, cart, pricing, orders, payments, customers."""
