# 📄 File: hub/shared/infrastructure/__init__.py
