"""
Core configuration and lifecycle
"""
