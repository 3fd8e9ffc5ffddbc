# 📄 File: hub/modules/accounts/infrastructure/__init__.py
