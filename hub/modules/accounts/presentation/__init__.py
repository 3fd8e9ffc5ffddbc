# 📄 File: hub/modules/accounts/presentation/__init__.py
# HTTP endpoints, schemas and dependencies.
