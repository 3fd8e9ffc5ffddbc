# 📄 File: hub/modules/auth/domain/__init__.py
# Business rules and value types.
