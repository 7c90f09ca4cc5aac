"""
Order Service
Owns order records; verifies the referenced customer before every insert.
"""
