"""
Core infrastructure: settings, backend, storage, session, errors
"""
