# 📄 File: hub/modules/accounts/presentation/api/v1/__init__.py
