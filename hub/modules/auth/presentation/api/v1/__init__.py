# 📄 File: hub/modules/auth/presentation/api/v1/__init__.py
