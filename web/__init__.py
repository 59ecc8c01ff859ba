"""
Web application package: a FastAPI JSON endpoint over the search core.
"""
