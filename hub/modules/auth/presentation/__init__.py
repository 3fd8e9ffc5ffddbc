# 📄 File: hub/modules/auth/presentation/__init__.py
# HTTP endpoints, schemas and dependencies.
