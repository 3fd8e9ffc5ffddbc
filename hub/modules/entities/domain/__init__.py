# 📄 File: hub/modules/entities/domain/__init__.py
# Business rules and value types.
