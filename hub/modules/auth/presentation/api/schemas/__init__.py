# 📄 File: hub/modules/auth/presentation/api/schemas/__init__.py
