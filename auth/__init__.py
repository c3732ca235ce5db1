"""
auth — User authentication module.

Provides:
  • JWT token creation & verification
  • Password hashing (bcrypt)
  • Login API route
  • ``get_current_user_id`` FastAPI dependency (the token gate)
"""
