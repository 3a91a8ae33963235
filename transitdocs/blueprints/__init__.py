"""
Transit Document Desk
Blueprint registry.
"""
