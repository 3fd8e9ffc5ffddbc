# 📄 File: hub/modules/accounts/presentation/api/schemas/__init__.py
