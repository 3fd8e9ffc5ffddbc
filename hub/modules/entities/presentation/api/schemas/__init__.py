# 📄 File: hub/modules/entities/presentation/api/schemas/__init__.py
