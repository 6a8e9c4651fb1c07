"""
Shared masking engine
"""
