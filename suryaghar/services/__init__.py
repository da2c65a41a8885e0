"""
Service layer

Business operations over a ``DataClient`` and an ``ObjectStorage``.
"""
