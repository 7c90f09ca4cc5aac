"""
Shared code for the CRM services

Configuration bases and utilities used by the gateway and both backends.
"""
