# backend/club_core/settings/__init__.py

import os

ENV = os.environ.get("DJANGO_ENV", "dev")  # default: dev

if ENV == "prod":
    from .prod import *
elif ENV == "test":
    from .test import *
else:
    from .dev import *
