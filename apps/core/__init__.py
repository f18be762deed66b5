"""
Core app: the franchise tenant hierarchy, users and shared access control.
"""
