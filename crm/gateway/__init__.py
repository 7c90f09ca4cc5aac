"""
Gateway
Single public entry point: routes by path prefix to the backend services.
"""
