# 📄 File: hub/modules/accounts/infrastructure/database/__init__.py
# ORM models and repositories.
