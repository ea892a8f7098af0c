"""
Backend package for the help center FAQ knowledge base.

This package provides a FastAPI application serving categories, FAQs,
featured cards, footer links and site settings from a full-document JSON
store, with a single admin identity guarding the write routes.
"""
