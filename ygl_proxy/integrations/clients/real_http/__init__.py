"""
Real HTTP integration clients.

These clients talk to external systems over HTTP:
- YouGotListings rentals / agents / landlords / leads API

Switching:
The client instance used by the endpoints is chosen in ygl_proxy/api/main.py only.
"""
