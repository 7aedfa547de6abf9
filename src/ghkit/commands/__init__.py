"""
ghkit command modules.
"""
