"""
Core application infrastructure
"""
