"""Core infrastructure: configuration, errors, logging and caching"""
