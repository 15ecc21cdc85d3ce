"""
Business domains
"""
