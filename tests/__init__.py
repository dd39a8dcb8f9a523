"""
Test suite for the letterquill package.
"""
