# catalog_api/__init__.py
