"""
Internal implementation of the context JSON codec. Nothing in this package is part of the public
API; use :mod:`ldcontext.codec` instead.
"""
