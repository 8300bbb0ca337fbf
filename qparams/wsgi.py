import os
import traceback
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'qparams.settings')

try:
    application = get_wsgi_application()
except Exception:
    # Print full traceback to the worker logs
    traceback.print_exc()
    raise
