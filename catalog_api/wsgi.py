# catalog_api/wsgi.py
from catalog_api.main import create_app

app = create_app()
