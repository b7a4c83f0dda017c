"""
wsgi.py
=======

WSGI-точка входа Django-проекта **Regional Events Calendar**.

Используется при деплое (gunicorn, uWSGI и др.); при локальной разработке
сервер запускается через `python manage.py runserver`.
"""

import os
from django.core.wsgi import get_wsgi_application


# Указываем Django, какой модуль настроек использовать
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "calendarsite.settings")

# Экземпляр приложения WSGI, используемый сервером
application = get_wsgi_application()
