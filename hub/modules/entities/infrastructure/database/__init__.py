# 📄 File: hub/modules/entities/infrastructure/database/__init__.py
# ORM models and repositories.
