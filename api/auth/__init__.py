"""
Gateway header authentication: user model, middleware, route dependencies.
"""
