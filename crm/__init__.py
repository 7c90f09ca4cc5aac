"""
CRM Services

Gateway, customer service and order service for the CRM latency demo.
"""

__version__ = "1.0.0"
