# 📄 File: hub/modules/entities/presentation/__init__.py
# HTTP endpoints, schemas and dependencies.
