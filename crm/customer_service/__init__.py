"""
Customer Service
Owns customer records: create, read, list, delete.
"""
