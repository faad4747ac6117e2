"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt, thread-offloaded)
  • JWT token creation & verification
  • Register / Login / Me API routes
  • ``get_current_claims`` FastAPI dependency
"""
