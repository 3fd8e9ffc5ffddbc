# 📄 File: hub/modules/auth/infrastructure/database/__init__.py
# ORM models and repositories.
