# 📄 File: hub/modules/auth/infrastructure/__init__.py
