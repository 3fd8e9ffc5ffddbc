# 📄 File: hub/modules/entities/presentation/api/v1/__init__.py
