"""
PointNow Admin Modules
======================

Flask blueprint modules for the admin dashboard.
"""

__all__ = ['proxy', 'auth', 'dashboard', 'businesses', 'customers', 'revenue', 'settings', 'ops']
