"""
Mock storefront backend

In-memory FastAPI stand-in for the storefront REST API, used for local
development and end-to-end tests of the cart client.
"""
