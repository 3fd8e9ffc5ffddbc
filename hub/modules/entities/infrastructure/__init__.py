# 📄 File: hub/modules/entities/infrastructure/__init__.py
