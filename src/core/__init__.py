"""Core domain package for template search.

Core contains the filter model, the view reducer and the view derivation
without any HTTP or Textual-specific code, keeping the search logic portable.
"""
