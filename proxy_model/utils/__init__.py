"""
Utility functions used across proxy_model.
"""

from .mongo import clean_mongo_doc, clean_mongo_docs, clean_mongo_value

__all__ = ["clean_mongo_doc", "clean_mongo_docs", "clean_mongo_value"]
